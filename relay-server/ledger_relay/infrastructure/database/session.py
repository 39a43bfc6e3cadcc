"""Engine and session factory construction for the transaction log."""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ledger_relay.core.config import Settings, get_settings
from ledger_relay.infrastructure.database.base import Base

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    database = settings.database
    options: dict[str, Any] = {"echo": database.echo or settings.debug}
    # SQLite uses a static pool per file; sizing only applies to server databases
    if make_url(settings.database_url).get_backend_name() != "sqlite":
        if database.pool_size is not None:
            options["pool_size"] = database.pool_size
        if database.max_overflow is not None:
            options["max_overflow"] = database.max_overflow
    return create_async_engine(settings.database_url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # records are read back after commit by the sink and the list endpoint
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """Create missing tables. Alembic stays the way to evolve an existing schema."""
    # registers TransactionRecord on Base.metadata
    from ledger_relay.db import models  # noqa: F401

    owned = engine is None
    target = engine if engine is not None else build_engine(get_settings())
    try:
        async with target.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Transaction log tables ready at %s", target.url.render_as_string(hide_password=True))
    finally:
        if owned:
            await target.dispose()


__all__ = ["build_engine", "build_session_factory", "init_db"]
