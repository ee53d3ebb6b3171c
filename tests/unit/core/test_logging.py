"""Unit tests for the logging setup and request context."""

from __future__ import annotations

import logging

import pytest
from loguru import logger

from recipe_api.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    setup_logging,
)


pytestmark = pytest.mark.unit


class TestLogContext:
    def test_bind_accumulates(self) -> None:
        bind_context(request_id="r1")
        bind_context(user_id=5)

        assert get_context() == {"request_id": "r1", "user_id": 5}

    def test_clear(self) -> None:
        bind_context(request_id="r1")
        clear_context()

        assert get_context() == {}

    def test_get_context_returns_copy(self) -> None:
        bind_context(request_id="r1")
        get_context()["request_id"] = "changed"

        assert get_context()["request_id"] == "r1"


class TestSetupLogging:
    def test_stdlib_logging_is_intercepted(self) -> None:
        setup_logging(log_level="DEBUG", log_format="json")
        try:
            assert any(
                type(h).__name__ == "InterceptHandler"
                for h in logging.getLogger().handlers
            )
        finally:
            logger.remove()
            logging.basicConfig(handlers=[logging.NullHandler()], force=True)

    def test_noisy_loggers_are_quieted(self) -> None:
        setup_logging(log_level="DEBUG", log_format="text", is_development=True)
        try:
            assert logging.getLogger("asyncpg").level == logging.WARNING
        finally:
            logger.remove()
            logging.basicConfig(handlers=[logging.NullHandler()], force=True)
