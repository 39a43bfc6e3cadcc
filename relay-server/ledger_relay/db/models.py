"""SQLAlchemy ORM models."""
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from ledger_relay.infrastructure.database.base import Base


class TransactionRecord(Base):
    __tablename__ = "transaction_records"

    # autoincrement id defines display order; created_at can tie within a second
    id = Column(Integer, primary_key=True, autoincrement=True)
    kind = Column(String(32), nullable=False, index=True)
    tx_hash = Column(String(66), nullable=False, index=True)
    amount = Column(String(80))
    # unbounded: the contract stores whatever currency text the sender signed
    currency = Column(Text)
    from_address = Column(String(42))
    to_address = Column(String(42))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
