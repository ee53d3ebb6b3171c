"""FastAPI application factory.

This module provides the application factory pattern for creating
FastAPI application instances with all necessary configuration.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from recipe_api.api.endpoints import health
from recipe_api.api.router import router as api_router
from recipe_api.core.config import Settings, get_settings
from recipe_api.core.events import lifespan
from recipe_api.core.exceptions import setup_exception_handlers
from recipe_api.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    TimingMiddleware,
)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="CRUD API for recipes and their ingredients, with user accounts",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url=None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        debug=settings.app.debug,
    )
    app.state.settings = settings
    app.state.db_pool = None

    setup_exception_handlers(app)
    _setup_middleware(app, settings)
    _setup_routers(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    The last middleware added runs first on the request, so the order on
    the way in is RequestID, Timing, Logging, CORS.
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials="*" not in settings.api.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    app.include_router(health.router)
    app.include_router(api_router, prefix=settings.api.prefix)
