"""Per-account write serialization."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict


class AccountLockRegistry:
    """Hands out one lock per signing address so nonces are assigned in order.

    Hold the lock only while building and broadcasting a write; receipts are
    awaited after it is released.
    """

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock_for(self, address: str) -> asyncio.Lock:
        key = address.lower()
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def hold(self, address: str) -> AsyncIterator[None]:
        async with self.lock_for(address):
            yield


__all__ = ["AccountLockRegistry"]
