"""SQLAlchemy-backed repository implementations."""

from .transaction_repository import SqlTransactionRecordRepository

__all__ = [
    "SqlTransactionRecordRepository",
]
