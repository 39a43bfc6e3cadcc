"""Transaction log domain service."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from ledger_relay.db.models import TransactionRecord as TransactionRecordModel
from ledger_relay.infrastructure.database.repositories.transaction_repository import (
    SqlTransactionRecordRepository,
)

from .models import TransactionEntry, TransactionKind, TransactionRecord
from .repository import TransactionRecordRepository


@dataclass(slots=True)
class TransactionLogService:
    repository: TransactionRecordRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "TransactionLogService":
        return cls(SqlTransactionRecordRepository(session))

    async def record(self, entry: TransactionEntry) -> TransactionRecord:
        model = await self.repository.add_record(
            kind=entry.kind.value,
            tx_hash=entry.tx_hash,
            # stored as text so large amounts survive the round trip
            amount=str(entry.amount) if entry.amount is not None else None,
            currency=entry.currency,
            from_address=entry.from_address,
            to_address=entry.to_address,
        )
        return self._to_domain(model)

    async def list_recent(self, limit: int = 100) -> list[TransactionRecord]:
        rows = await self.repository.list_recent(limit)
        return [self._to_domain(row) for row in rows]

    async def count(self) -> int:
        return await self.repository.count()

    @staticmethod
    def _to_domain(model: TransactionRecordModel) -> TransactionRecord:
        return TransactionRecord(
            id=model.id,
            kind=TransactionKind(model.kind),
            tx_hash=model.tx_hash,
            amount=model.amount,
            currency=model.currency,
            from_address=model.from_address,
            to_address=model.to_address,
            created_at=model.created_at,
        )
