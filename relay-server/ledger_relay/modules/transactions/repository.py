"""Repository protocol for the transaction log."""

from __future__ import annotations

from typing import Protocol, Sequence

from ledger_relay.db.models import TransactionRecord as TransactionRecordModel


class TransactionRecordRepository(Protocol):
    async def add_record(
        self,
        *,
        kind: str,
        tx_hash: str,
        amount: str | None,
        currency: str | None,
        from_address: str | None,
        to_address: str | None,
    ) -> TransactionRecordModel:
        ...

    async def list_recent(self, limit: int) -> Sequence[TransactionRecordModel]:
        ...

    async def count(self) -> int:
        ...
