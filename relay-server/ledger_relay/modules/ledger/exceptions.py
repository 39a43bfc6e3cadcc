"""Ledger domain specific exceptions."""


class LedgerError(Exception):
    """Base class for ledger related domain errors."""


class LedgerConfigurationError(LedgerError):
    """Raised when the chain connection or signing key is not configured."""


class GatewayError(LedgerError):
    """Raised when the external ledger rejects or fails a call."""


class SubmissionError(GatewayError):
    """Raised when a write could not be built, signed or broadcast."""


class ConfirmationTimeoutError(GatewayError):
    """Raised when no receipt arrived before the confirmation timeout."""

    def __init__(self, transaction_id: str, message: str = "confirmation timed out") -> None:
        super().__init__(message)
        self.transaction_id = transaction_id


class InvalidIndexError(LedgerError):
    """Raised when a transaction index is not a non-negative integer."""


class InvalidAddressError(LedgerError):
    """Raised when an address argument is not a 20 byte hex address."""
