"""Durable transaction-log sink used after confirmed ledger writes."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .models import TransactionEntry
from .service import TransactionLogService


class TransactionSink(Protocol):
    async def record(self, entry: TransactionEntry) -> None:
        ...


class SessionTransactionSink:
    """Writes each entry in its own session so a failed write never touches the caller's."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def record(self, entry: TransactionEntry) -> None:
        async with self._session_factory() as session:
            service = TransactionLogService.with_session(session)
            await service.record(entry)
            await session.commit()


__all__ = ["SessionTransactionSink", "TransactionSink"]
