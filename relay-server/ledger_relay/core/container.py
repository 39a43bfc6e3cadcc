"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ledger_relay.core.config import Settings, get_settings
from ledger_relay.infrastructure.database.session import build_engine, build_session_factory
from ledger_relay.infrastructure.ledger import Web3LedgerGateway
from ledger_relay.modules.ledger import AccountLockRegistry, LedgerGateway, LedgerService
from ledger_relay.modules.relay import RelayService, SignatureRegistry
from ledger_relay.modules.transactions import SessionTransactionSink, TransactionSink


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    ledger: LedgerService
    relay: RelayService
    session_factory: async_sessionmaker[AsyncSession]
    engine: Optional[AsyncEngine] = None

    async def dispose(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


def build_container(
    settings: Settings,
    *,
    gateway: Optional[LedgerGateway] = None,
    sink: Optional[TransactionSink] = None,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    engine: Optional[AsyncEngine] = None,
) -> ApplicationContainer:
    """Build the process-wide services; tests pass fakes for any collaborator."""
    if session_factory is None:
        engine = engine or build_engine(settings)
        session_factory = build_session_factory(engine)

    gateway = gateway or Web3LedgerGateway.from_settings(settings.chain)
    sink = sink or SessionTransactionSink(session_factory)
    ledger = LedgerService(gateway, sink, AccountLockRegistry())

    window = settings.relay.replay_window_seconds
    registry = SignatureRegistry(window) if settings.relay.reject_duplicate_signatures else None
    relay = RelayService(ledger, window=window, registry=registry)

    return ApplicationContainer(
        settings=settings,
        ledger=ledger,
        relay=relay,
        session_factory=session_factory,
        engine=engine,
    )


@lru_cache()
def get_container() -> ApplicationContainer:
    return build_container(get_settings())


__all__ = ["ApplicationContainer", "build_container", "get_container"]
