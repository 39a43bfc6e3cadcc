"""Ledger domain exports"""

from .exceptions import (
    ConfirmationTimeoutError,
    GatewayError,
    InvalidAddressError,
    InvalidIndexError,
    LedgerConfigurationError,
    LedgerError,
    SubmissionError,
)
from .gateway import LedgerGateway, Receipt, normalize_tx_hash
from .locks import AccountLockRegistry
from .service import LedgerService, WriteResult

__all__ = [
    "AccountLockRegistry",
    "ConfirmationTimeoutError",
    "GatewayError",
    "InvalidAddressError",
    "InvalidIndexError",
    "LedgerConfigurationError",
    "LedgerError",
    "LedgerGateway",
    "LedgerService",
    "Receipt",
    "SubmissionError",
    "WriteResult",
    "normalize_tx_hash",
]
