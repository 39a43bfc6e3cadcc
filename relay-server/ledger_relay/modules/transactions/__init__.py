"""Transaction log exports"""

from .models import TransactionEntry, TransactionKind, TransactionRecord
from .service import TransactionLogService
from .sink import SessionTransactionSink, TransactionSink

__all__ = [
    "SessionTransactionSink",
    "TransactionEntry",
    "TransactionKind",
    "TransactionLogService",
    "TransactionRecord",
    "TransactionSink",
]
