"""Custom middleware components."""

from recipe_api.core.middleware.logging import LoggingMiddleware
from recipe_api.core.middleware.request_id import RequestIDMiddleware
from recipe_api.core.middleware.timing import TimingMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "TimingMiddleware",
]
