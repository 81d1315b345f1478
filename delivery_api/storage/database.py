"""MySQL connection pool and delivery table access."""

from typing import Any, Dict, List

from loguru import logger
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from ..config import Settings, settings as default_settings
from ..models.delivery import (
    COLUMN_DELIVERED,
    COLUMN_DELIVERER_NAME,
    COLUMN_ID,
    TABLE_NAME,
    DeliveryFilters,
    StatusUpdate,
)
from .query_builder import build_delivery_query


UPDATE_STATUS_SQL = text(
    f"UPDATE {TABLE_NAME} SET {COLUMN_DELIVERED} = :status, "
    f"{COLUMN_DELIVERER_NAME} = :deliverer_name "
    f"WHERE {COLUMN_ID} = :delivery_id"
)


def create_engine(config: Settings = None) -> AsyncEngine:
    """
    Create the process-wide connection pool.

    The pool is bounded by db_pool_size with no overflow; requests beyond
    the limit wait up to db_pool_timeout seconds for a free connection.
    The MySQL dialect connects with the FOUND_ROWS flag, so UPDATE
    rowcounts report matched rows rather than changed rows.
    """
    config = config or default_settings
    engine = create_async_engine(
        config.database_url,
        pool_size=config.db_pool_size,
        max_overflow=0,
        pool_timeout=config.db_pool_timeout,
    )
    logger.info(
        f"Connection pool created for {config.db_user}@{config.db_host}:"
        f"{config.db_port}/{config.db_name} (size: {config.db_pool_size})"
    )
    return engine


async def check_connection(engine: AsyncEngine) -> None:
    """Acquire one pooled connection and release it immediately."""
    async with engine.connect():
        pass


class DeliveryRepository:
    """Reads and status updates for the `entregas` table."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def find(self, filters: DeliveryFilters) -> List[Dict[str, Any]]:
        """Return every row matching the filters, as returned by the database."""
        statement, params = build_delivery_query(filters)
        logger.debug(f"Fetching deliveries: {statement} {params}")

        async with self.engine.connect() as conn:
            result = await conn.execute(statement, params)
            rows = [dict(row) for row in result.mappings().all()]

        logger.info(f"Retrieved {len(rows)} deliveries")
        return rows

    async def update_status(self, delivery_id: str, update: StatusUpdate) -> int:
        """Apply a status update and return the number of matched rows."""
        async with self.engine.begin() as conn:
            result = await conn.execute(UPDATE_STATUS_SQL, update.to_params(delivery_id))

        logger.info(
            f"Delivery {delivery_id}: {COLUMN_DELIVERED}={update.status.value}, "
            f"{COLUMN_DELIVERER_NAME}={update.deliverer_name!r} "
            f"({result.rowcount} rows matched)"
        )
        return result.rowcount
