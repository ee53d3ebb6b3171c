"""Application lifespan event handlers.

Startup configures logging, refuses to run without a signing secret and
opens the database pool; shutdown closes the pool.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_api.core.config import Settings, get_settings
from recipe_api.database.connection import close_database_pool, create_database_pool
from recipe_api.observability.logging import get_logger, setup_logging


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


def _settings_for(app: FastAPI) -> Settings:
    settings = getattr(app.state, "settings", None)
    return settings if isinstance(settings, Settings) else get_settings()


async def _startup(app: FastAPI, settings: Settings) -> None:
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )
    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        port=settings.listen_port,
    )

    # Raises RuntimeError when JWT_SECRET is missing.
    settings.require_jwt_secret()

    app.state.db_pool = await create_database_pool(settings)
    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    await close_database_pool(getattr(app.state, "db_pool", None))
    app.state.db_pool = None
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle events."""
    await _startup(app, _settings_for(app))
    try:
        yield
    finally:
        await _shutdown(app)
