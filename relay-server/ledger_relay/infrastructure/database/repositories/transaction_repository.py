"""SQLAlchemy implementation for the transaction log"""

from __future__ import annotations

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger_relay.db.models import TransactionRecord


class SqlTransactionRecordRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add_record(
        self,
        *,
        kind: str,
        tx_hash: str,
        amount: str | None,
        currency: str | None,
        from_address: str | None,
        to_address: str | None,
    ) -> TransactionRecord:
        record = TransactionRecord(
            kind=kind,
            tx_hash=tx_hash,
            amount=amount,
            currency=currency,
            from_address=from_address,
            to_address=to_address,
        )
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def list_recent(self, limit: int) -> list[TransactionRecord]:
        stmt = select(TransactionRecord).order_by(desc(TransactionRecord.id)).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(TransactionRecord))
        return int(result.scalar_one())
