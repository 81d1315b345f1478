#!/usr/bin/env python3
"""
Script to verify the delivery database is reachable.

Acquires a pooled connection and reads one row count from the
`entregas` table using the same settings as the API.

Usage:
    python scripts/check_database.py
"""

import asyncio
import sys
from pathlib import Path

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from delivery_api.config import settings  # noqa: E402
from delivery_api.models.delivery import TABLE_NAME  # noqa: E402
from delivery_api.storage import check_connection, create_engine  # noqa: E402


async def check() -> int:
    """Return the number of rows in the delivery table."""
    engine = create_engine(settings)
    try:
        await check_connection(engine)
        async with engine.connect() as conn:
            result = await conn.execute(text(f"SELECT COUNT(*) FROM {TABLE_NAME}"))
            return result.scalar_one()
    finally:
        await engine.dispose()


def main():
    """Check database connectivity."""
    print(f"🚀 Connecting to {settings.db_host}:{settings.db_port}/{settings.db_name}...")

    try:
        count = asyncio.run(check())
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Error connecting to database: {e}")
        print(f"❌ Error: {e}")
        sys.exit(1)

    print("✅ Database reachable!")
    print(f"📊 Table '{TABLE_NAME}' holds {count} deliveries")


if __name__ == "__main__":
    main()
