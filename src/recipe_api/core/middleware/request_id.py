"""Request ID middleware.

Every request gets an id, taken from the ``X-Request-ID`` header when the
caller sent a usable one and generated otherwise. The id is echoed back in
the response and bound to the logging context.
"""

from __future__ import annotations

import re
import uuid
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from recipe_api.observability.logging import bind_context, clear_context


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


def resolve_request_id(incoming: str | None) -> str:
    """Reuse ``incoming`` if it looks like an id, otherwise make a new one."""
    if incoming and _VALID_REQUEST_ID.match(incoming):
        return incoming
    return uuid.uuid4().hex


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request id to ``request.state``, the logs and the response."""

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER) -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        clear_context()

        request_id = resolve_request_id(request.headers.get(self.header_name))
        request.state.request_id = request_id
        bind_context(request_id=request_id)

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
