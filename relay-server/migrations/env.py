"""Alembic environment for the relay's transaction log.

Online runs connect through the same async driver as the server; offline
runs render SQL against the equivalent synchronous dialect.
"""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from ledger_relay.core.config import get_settings
from ledger_relay.db import models  # noqa: F401
from ledger_relay.infrastructure.database.base import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
settings = get_settings()


def _offline_url() -> str:
    url = make_url(settings.database_url)
    # aiosqlite -> sqlite, asyncpg -> postgresql and so on
    return url.set(drivername=url.get_backend_name()).render_as_string(hide_password=False)


def _is_sqlite() -> bool:
    return make_url(settings.database_url).get_backend_name() == "sqlite"


def run_migrations_offline() -> None:
    context.configure(
        url=_offline_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        render_as_batch=_is_sqlite(),
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    # SQLite cannot ALTER most constraints in place; batch mode copies the table
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=_is_sqlite(),
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    # no pooling: the CLI opens one connection and exits
    engine = create_async_engine(settings.database_url, poolclass=NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
