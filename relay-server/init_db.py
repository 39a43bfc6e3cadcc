"""
Create the transaction log tables without running Alembic.
Useful for local development against SQLite.
"""
import asyncio

from ledger_relay.core.config import get_settings
from ledger_relay.infrastructure.database.session import init_db


async def create_tables():
    await init_db()
    print("=" * 50)
    print(f"Tables created at {get_settings().database_url}")
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(create_tables())
