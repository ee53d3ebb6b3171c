"""Application exceptions and FastAPI exception handlers.

Every failure leaves the service as ``{"error": "<message>"}``; request
validation failures additionally carry a ``details`` list.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_api.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import Request


logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"


class ErrorDetail(BaseModel):
    """Single field-level validation problem."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing request."""

    error: str
    details: list[ErrorDetail] | None = None


class AppError(Exception):
    """Base application exception carrying an HTTP status."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        if status_code is not None:
            self.status_code = status_code
        self.message = message
        super().__init__(message)


class BadRequestError(AppError):
    """Generic or validation failure."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Please authenticate.") -> None:
        super().__init__(message)


class ForbiddenError(AppError):
    """Authenticated caller is not allowed to touch the resource."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    """Requested resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ServiceUnavailableError(AppError):
    """A backing resource (e.g. the database pool) is not available."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """Turn unexpected failures inside a handler into a fixed 400 response.

    ``AppError`` instances propagate untouched. Anything else is logged with
    its traceback and replaced by ``BadRequestError(message)`` so driver or
    SQL details never reach the client.
    """
    try:
        yield
    except AppError:
        raise
    except Exception:
        logger.exception(message)
        raise BadRequestError(message) from None


def _error_response(
    status_code: int,
    message: str,
    details: list[ErrorDetail] | None = None,
    headers: dict[str, str] | None = None,
) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message, details=details).model_dump(
            exclude_none=True
        ),
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppError)
    async def app_error_handler(_request: Request, exc: AppError) -> ORJSONResponse:
        headers = None
        if isinstance(exc, UnauthorizedError):
            headers = {"WWW-Authenticate": "Bearer"}
        return _error_response(exc.status_code, exc.message, headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        _request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        return _error_response(
            exc.status_code,
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        _request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        details = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Request validation failed",
            details=details,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        logger.opt(exception=exc).error(
            "Unhandled exception",
            method=request.method,
            path=request.url.path,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            GENERIC_ERROR_MESSAGE,
        )
