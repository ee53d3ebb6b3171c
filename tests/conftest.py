"""Shared test fixtures and configuration for the Recipe API tests.

The environment is pinned to ``test`` before any application module is
imported so that the cached settings pick up the test YAML overrides.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest


os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")

from recipe_api.core.config import get_settings  # noqa: E402
from recipe_api.observability.logging import clear_context  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None]:
    """Drop cached settings before and after every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_log_context() -> Generator[None]:
    clear_context()
    yield
    clear_context()
