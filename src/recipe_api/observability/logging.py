"""Logging configuration using Loguru.

JSON lines go to stdout outside development; development gets colourised
text. Request-scoped fields (request id, path, user id) live in a
``ContextVar`` and are attached to every record emitted while a request is
being served. Standard library loggers are routed into Loguru.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

import orjson
from loguru import logger


if TYPE_CHECKING:
    from loguru import Logger, Record


_log_context: ContextVar[dict[str, Any] | None] = ContextVar("log_context", default=None)

# Third-party loggers that are too chatty at INFO.
_NOISY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "asyncpg", "asyncio")


class InterceptHandler(logging.Handler):
    """Forward standard library log records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _json_sink_format(record: Record) -> str:
    context = _log_context.get() or {}
    record["extra"].update(context)

    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["extra"].get("name", record["name"]),
        "function": record["function"],
        "line": record["line"],
        **{k: v for k, v in record["extra"].items() if k != "name"},
    }
    exc = record["exception"]
    if exc:
        payload["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    record["extra"]["_json"] = orjson.dumps(payload, default=str).decode()
    return "{extra[_json]}\n"


def _text_sink_format(record: Record) -> str:
    context = _log_context.get() or {}
    context_str = ""
    if context:
        context_str = " | " + " ".join(f"{k}={v}" for k, v in context.items())
    # Braces in context values would be read as format fields.
    context_str = context_str.replace("{", "{{").replace("}", "}}")

    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        f"{context_str} - "
        "<level>{message}</level>\n"
        + ("{exception}\n" if record["exception"] else "")
    )


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
) -> None:
    """Configure Loguru sinks and intercept standard logging.

    Args:
        log_level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: ``"json"`` or ``"text"``.
        is_development: Force human-readable output.
    """
    logger.remove()
    logger.configure(extra={"name": "recipe_api"})

    if log_format == "json" and not is_development:
        logger.add(
            sys.stdout,
            format=_json_sink_format,
            level=log_level.upper(),
            colorize=False,
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stdout,
            format=_text_sink_format,
            level=log_level.upper(),
            colorize=True,
            backtrace=True,
            diagnose=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Logger:
    """Return the Loguru logger bound to ``name``."""
    return logger.bind(name=name)


def bind_context(**kwargs: Any) -> None:
    """Attach key/value pairs to every log record of the current context."""
    current = dict(_log_context.get() or {})
    current.update(kwargs)
    _log_context.set(current)


def clear_context() -> None:
    """Drop all request-scoped logging fields."""
    _log_context.set({})


def get_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return dict(_log_context.get() or {})


__all__ = [
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "setup_logging",
]
