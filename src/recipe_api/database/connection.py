"""PostgreSQL connection pool management.

The pool is an explicit resource: the application lifespan creates it with
``create_database_pool`` and hands it to whoever needs it. Nothing in this
module keeps a reference to it.
"""

from __future__ import annotations

import re
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import asyncpg

from recipe_api.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from asyncpg import Connection, Pool

    from recipe_api.core.config import Settings

logger = get_logger(__name__)

_DSN_PASSWORD = re.compile(r":[^:@/]+@")


def mask_dsn(dsn: str) -> str:
    """Hide the password part of a connection string for logging."""
    return _DSN_PASSWORD.sub(":****@", dsn, count=1)


def affected_rows(status: str) -> int:
    """Extract the row count from an asyncpg command status tag.

    ``"DELETE 3"`` -> 3, ``"UPDATE 0"`` -> 0, ``"INSERT 0 1"`` -> 1.
    """
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (ValueError, AttributeError):
        return 0


async def create_database_pool(settings: Settings) -> Pool:
    """Create the asyncpg pool and verify it with ``SELECT 1``.

    Raises:
        asyncpg.PostgresError: If the database rejects the connection check.
        OSError: If the server cannot be reached.
    """
    dsn = settings.database_url
    logger.info(
        "Initializing database connection pool",
        dsn=mask_dsn(dsn),
        min_size=settings.database.min_pool_size,
        max_size=settings.database.max_pool_size,
    )

    pool = await asyncpg.create_pool(
        dsn=dsn,
        min_size=settings.database.min_pool_size,
        max_size=settings.database.max_pool_size,
        command_timeout=settings.database.command_timeout,
        ssl="require" if settings.database.ssl else None,
    )

    try:
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except asyncpg.PostgresError:
        logger.exception("Failed to connect to database")
        await pool.close()
        raise

    logger.info("Database connection established successfully")
    return pool


async def close_database_pool(pool: Pool | None) -> None:
    """Close a pool created by ``create_database_pool``."""
    if pool is None:
        return
    logger.info("Closing database connection pool")
    await pool.close()
    logger.info("Database connection pool closed")


async def check_database_health(pool: Pool | None) -> str:
    """Return ``healthy``, ``unhealthy`` or ``not_initialized``."""
    if pool is None:
        return "not_initialized"
    try:
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, OSError):
        logger.warning("Database health check failed")
        return "unhealthy"
    return "healthy"


@asynccontextmanager
async def transaction(pool: Pool) -> AsyncIterator[Connection]:
    """Acquire one connection and run the block inside a transaction."""
    async with pool.acquire() as conn, conn.transaction():
        yield conn
