"""Create the database schema and optionally load seed data.

Usage::

    python -m recipe_api.database.migrate [--seed path/to/seed.sql]
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

import asyncpg

from recipe_api.core.config import get_settings
from recipe_api.database.connection import mask_dsn
from recipe_api.observability.logging import get_logger, setup_logging


logger = get_logger(__name__)

SCHEMA_FILE = Path(__file__).with_name("schema.sql")


async def migrate(
    dsn: str, *, seed_file: Path | None = None, ssl: bool = False
) -> None:
    """Apply ``schema.sql`` and then ``seed_file`` over one connection.

    With ``ssl`` the connection requires TLS, as the application pool does.

    Raises:
        asyncpg.PostgresError: If any statement fails.
        OSError: If the server or a SQL file cannot be reached.
    """
    schema_sql = SCHEMA_FILE.read_text(encoding="utf-8")
    seed_sql = seed_file.read_text(encoding="utf-8") if seed_file else None

    logger.info("Testing database connection", dsn=mask_dsn(dsn))
    conn = await asyncpg.connect(dsn, ssl="require" if ssl else None)
    try:
        await conn.fetchval("SELECT NOW()")
        logger.info("Database connection successful")

        await conn.execute(schema_sql)
        logger.info("Schema executed successfully", file=str(SCHEMA_FILE))

        if seed_sql is not None:
            await conn.execute(seed_sql)
            logger.info("Seed data executed successfully", file=str(seed_file))
    finally:
        await conn.close()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bootstrap the recipe database.")
    parser.add_argument(
        "--seed",
        type=Path,
        default=None,
        help="SQL file with seed data to run after the schema",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``recipe-api-migrate``; returns the exit status."""
    args = _parse_args(argv)
    settings = get_settings()
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    try:
        asyncio.run(
            migrate(
                settings.database_url,
                seed_file=args.seed,
                ssl=settings.database.ssl,
            )
        )
    except (asyncpg.PostgresError, OSError):
        logger.exception("Migration failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
