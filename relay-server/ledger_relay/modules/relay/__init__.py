"""Relay domain exports"""

from .codec import encode_payload
from .exceptions import (
    AuthenticationError,
    DuplicateSignatureError,
    InvalidSignatureError,
    PayloadValidationError,
    RelayError,
    ReplayError,
    SignerMismatchError,
)
from .models import (
    FailureReason,
    RejectionReason,
    RelayFailed,
    RelayOutcome,
    RelayPayload,
    RelayRejected,
    RelayRequest,
    RelayState,
    RelaySuccess,
    VerifiedIntent,
)
from .replay import SignatureRegistry, check_window
from .service import RelayService

__all__ = [
    "AuthenticationError",
    "DuplicateSignatureError",
    "FailureReason",
    "InvalidSignatureError",
    "PayloadValidationError",
    "RejectionReason",
    "RelayError",
    "RelayFailed",
    "RelayOutcome",
    "RelayPayload",
    "RelayRejected",
    "RelayRequest",
    "RelayService",
    "RelayState",
    "RelaySuccess",
    "ReplayError",
    "SignatureRegistry",
    "SignerMismatchError",
    "VerifiedIntent",
    "check_window",
    "encode_payload",
]
