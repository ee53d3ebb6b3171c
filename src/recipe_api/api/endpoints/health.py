"""Health check endpoints.

Provides the root banner plus liveness and readiness probes for load
balancers and orchestrators. None of them require authentication.
"""

from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import ORJSONResponse

from recipe_api.api.dependencies import AppSettingsDep  # noqa: TC001
from recipe_api.database.connection import check_database_health
from recipe_api.schemas import HealthResponse, ReadinessResponse, RootResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/",
    response_model=RootResponse,
    summary="Root endpoint",
)
async def root() -> RootResponse:
    return RootResponse(status="ok", message="Server is running")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(
    settings: AppSettingsDep,
) -> HealthResponse:
    """Check if the service is alive. External dependencies are not checked."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check verifying the database is reachable.",
    responses={503: {"model": ReadinessResponse, "description": "Not ready"}},
)
async def readiness_check(
    request: Request,
    settings: AppSettingsDep,
) -> ReadinessResponse | ORJSONResponse:
    """Run ``SELECT 1`` against the pool; 503 unless it succeeds."""
    database = await check_database_health(getattr(request.app.state, "db_pool", None))
    response = ReadinessResponse(
        status="ready" if database == "healthy" else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies={"database": database},
    )
    if database != "healthy":
        return ORJSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(mode="json"),
        )
    return response
