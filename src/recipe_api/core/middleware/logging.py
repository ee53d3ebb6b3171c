"""Request logging middleware.

Writes one line when a request arrives and one when its response leaves,
with method, path and client address bound to the logging context so that
every line logged while handling the request carries them too. The
completion line also carries the authenticated ``user_id``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from recipe_api.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

logger = get_logger(__name__)

# Probe endpoints are hit constantly and would drown everything else.
DEFAULT_EXCLUDED_PATHS = frozenset({"/health", "/ready", "/favicon.ico"})


def client_ip(request: Request) -> str:
    """Best guess at the caller's address, honouring reverse proxy headers."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host
    return "unknown"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Structured request/response logging."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: frozenset[str] | set[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = (
            DEFAULT_EXCLUDED_PATHS if exclude_paths is None else frozenset(exclude_paths)
        )

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        bind_context(
            method=request.method,
            path=request.url.path,
            client_ip=client_ip(request),
        )
        logger.info("Request started")

        response = await call_next(request)

        # Set by the authentication dependency, which runs in another task.
        user_id = getattr(request.state, "user_id", None)
        if user_id is not None:
            bind_context(user_id=user_id)

        log = logger.warning if response.status_code >= 500 else logger.info
        log("Request completed", status_code=response.status_code)
        return response
