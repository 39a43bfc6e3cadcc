"""Domain models for signed relay requests and their outcomes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ledger_relay.modules.ledger.gateway import Receipt

from .exceptions import PayloadValidationError

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


class RelayState(str, Enum):
    RECEIVED = "received"
    SIGNATURE_CHECKED = "signature_checked"
    REPLAY_CHECKED = "replay_checked"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    RECORDED = "recorded"
    RESPONDED = "responded"
    REJECTED = "rejected"
    FAILED = "failed"


class RejectionReason(str, Enum):
    INVALID_PAYLOAD = "invalid_payload"
    INVALID_SIGNATURE = "invalid_signature"
    SIGNER_MISMATCH = "signer_mismatch"
    STALE_TIMESTAMP = "stale_timestamp"
    DUPLICATE_SIGNATURE = "duplicate_signature"


class FailureReason(str, Enum):
    SUBMISSION_ERROR = "submission_error"
    CONFIRMATION_TIMEOUT = "confirmation_timeout"
    INTERNAL_ERROR = "internal_error"


def is_address(value: object) -> bool:
    return isinstance(value, str) and ADDRESS_PATTERN.match(value) is not None


def is_utf8_encodable(value: str) -> bool:
    # JSON "\ud800" decodes to a lone surrogate, which has no UTF-8 form
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


@dataclass(frozen=True, slots=True)
class RelayPayload:
    """What the client signed. ``to`` is kept exactly as the client sent it."""

    sender_name: str
    to: str
    recipient_name: str
    amount: int
    issued_at: int
    currency: str = ""
    purpose: str = ""

    def __post_init__(self) -> None:
        if not is_address(self.to):
            raise PayloadValidationError("to must be a 0x-prefixed 20 byte hex address")
        if isinstance(self.amount, bool) or not isinstance(self.amount, int) or self.amount < 0:
            raise PayloadValidationError("amount must be a non-negative integer")
        if isinstance(self.issued_at, bool) or not isinstance(self.issued_at, int):
            raise PayloadValidationError("issuedAt must be an integer unix timestamp")
        for name in ("sender_name", "recipient_name", "currency", "purpose"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise PayloadValidationError(f"{name} must be a string")
            if not is_utf8_encodable(value):
                raise PayloadValidationError(f"{name} must be valid unicode text")


@dataclass(frozen=True, slots=True)
class RelayRequest:
    payload: RelayPayload
    signature: Union[bytes, str] = field(repr=False)
    claimed_signer: str

    def __post_init__(self) -> None:
        if not is_address(self.claimed_signer):
            raise PayloadValidationError("claimedSigner must be a 0x-prefixed 20 byte hex address")


@dataclass(frozen=True, slots=True)
class VerifiedIntent:
    """A payload whose signature and timestamp have both been checked.

    Only :class:`~ledger_relay.modules.relay.service.RelayService` creates these.
    """

    payload: RelayPayload
    recovered_signer: str


@dataclass(frozen=True, slots=True)
class RelaySuccess:
    transaction_id: str
    receipt: Receipt


@dataclass(frozen=True, slots=True)
class RelayRejected:
    reason: RejectionReason


@dataclass(frozen=True, slots=True)
class RelayFailed:
    reason: FailureReason
    transaction_id: Optional[str] = None


RelayOutcome = Union[RelaySuccess, RelayRejected, RelayFailed]


__all__ = [
    "FailureReason",
    "RejectionReason",
    "RelayFailed",
    "RelayOutcome",
    "RelayPayload",
    "RelayRejected",
    "RelayRequest",
    "RelayState",
    "RelaySuccess",
    "VerifiedIntent",
    "is_address",
    "is_utf8_encodable",
]
