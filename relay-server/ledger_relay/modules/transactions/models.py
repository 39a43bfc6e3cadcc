"""Domain models for the transaction log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class TransactionKind(str, Enum):
    APPROVE_SENDER = "approveSender"
    APPROVE_RECIPIENT = "approveRecipient"
    TRANSFER_OWNERSHIP = "transferOwnership"
    ADD_TRANSACTION = "addTransaction"


@dataclass(frozen=True, slots=True)
class TransactionEntry:
    """What gets written after a confirmed ledger write."""

    kind: TransactionKind
    tx_hash: str
    amount: Optional[int] = None
    currency: Optional[str] = None
    from_address: Optional[str] = None
    to_address: Optional[str] = None


@dataclass(slots=True)
class TransactionRecord:
    id: int
    kind: TransactionKind
    tx_hash: str
    amount: Optional[str]
    currency: Optional[str]
    from_address: Optional[str]
    to_address: Optional[str]
    created_at: Optional[datetime]
