"""Relay domain specific exceptions."""

from ledger_relay.core.crypto import InvalidSignatureError


class RelayError(Exception):
    """Base class for relay domain errors."""


class PayloadValidationError(RelayError):
    """Raised when a relay request has missing or malformed fields."""


class AuthenticationError(RelayError):
    """Raised when the signature does not prove the claimed authorship."""


class SignerMismatchError(AuthenticationError):
    """Raised when the recovered signer differs from the claimed signer."""


class ReplayError(RelayError):
    """Raised when the payload timestamp falls outside the replay window."""


class DuplicateSignatureError(ReplayError):
    """Raised when a signature was already relayed inside the window."""


class PersistenceWarning(UserWarning):
    """Category for transaction-log write failures that do not affect clients."""


__all__ = [
    "AuthenticationError",
    "DuplicateSignatureError",
    "InvalidSignatureError",
    "PayloadValidationError",
    "PersistenceWarning",
    "RelayError",
    "ReplayError",
    "SignerMismatchError",
]
