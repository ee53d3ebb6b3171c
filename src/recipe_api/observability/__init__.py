"""Observability: structured logging."""

from recipe_api.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    get_logger,
    setup_logging,
)


__all__ = [
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "setup_logging",
]
