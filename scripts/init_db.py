"""
Create the asset tables for a development database.
Use alembic migrations for anything shared.
"""
import asyncio

from asset_server.core.config import get_settings
from asset_server.core.secrets import resolve_database_url
from asset_server.infrastructure.database import Database, init_db


async def create_tables() -> None:
    settings = get_settings()
    database = Database.from_settings(settings, resolve_database_url(settings))
    try:
        await init_db(database)
    finally:
        await database.close()
    print(f"Tables created ({settings.environment})")


if __name__ == "__main__":
    asyncio.run(create_tables())
