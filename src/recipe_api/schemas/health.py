"""Health check schemas."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from recipe_api.schemas.base import APIResponse


class RootResponse(APIResponse):
    status: str = Field(..., examples=["ok"])
    message: str = Field(..., examples=["Server is running"])


class HealthResponse(APIResponse):
    """Liveness probe response."""

    status: str = Field(..., description="Health status", examples=["healthy"])
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    version: str
    environment: str


class ReadinessResponse(HealthResponse):
    """Readiness probe response with dependency status."""

    dependencies: dict[str, str] = Field(default_factory=dict)
