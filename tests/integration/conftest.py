"""Integration test fixtures.

The full application is served through ``httpx.ASGITransport`` with the
PostgreSQL repositories swapped for in-memory ones via
``app.dependency_overrides``. The lifespan is not run, so no database is
needed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient

from recipe_api.api.dependencies import (
    get_ingredient_repository,
    get_recipe_repository,
    get_user_repository,
)
from recipe_api.core.config import Settings
from recipe_api.core.config.settings import AuthSettings, JwtSettings
from recipe_api.factory import create_app
from tests.fixtures.in_memory import (
    InMemoryDatabase,
    InMemoryIngredientRepository,
    InMemoryRecipeRepository,
    InMemoryUserRepository,
)


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from fastapi import FastAPI


pytestmark = pytest.mark.integration


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        APP_ENV="test",
        JWT_SECRET="integration-test-secret",
        auth=AuthSettings(jwt=JwtSettings(expires_in="1h", bcrypt_rounds=4)),
    )


@pytest.fixture
def db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def app(
    test_settings: Settings,
    db: InMemoryDatabase,
) -> FastAPI:
    """Application wired to the in-memory database."""
    app = create_app(test_settings)
    app.state.db_pool = db.pool
    app.dependency_overrides[get_user_repository] = lambda: InMemoryUserRepository(
        db, bcrypt_rounds=test_settings.auth.jwt.bcrypt_rounds
    )
    app.dependency_overrides[get_recipe_repository] = lambda: InMemoryRecipeRepository(db)
    app.dependency_overrides[get_ingredient_repository] = (
        lambda: InMemoryIngredientRepository(db)
    )
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def register_user(client: AsyncClient) -> Callable[[str], Awaitable[dict[str, Any]]]:
    """Register ``<name>@x.com`` and return its id plus auth headers."""

    async def _register(name: str) -> dict[str, Any]:
        response = await client.post(
            "/api/auth/register",
            json={"username": name, "email": f"{name}@x.com", "password": "pw"},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {
            "id": body["user"]["id"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }

    return _register


@pytest.fixture
async def alice(register_user: Callable[[str], Awaitable[dict[str, Any]]]) -> dict[str, Any]:
    return await register_user("alice")


@pytest.fixture
async def bob(register_user: Callable[[str], Awaitable[dict[str, Any]]]) -> dict[str, Any]:
    return await register_user("bob")


@pytest.fixture
async def alice_recipe(client: AsyncClient, alice: dict[str, Any]) -> dict[str, Any]:
    response = await client.post(
        "/api/recipes",
        json={
            "title": "Pancakes",
            "description": "Fluffy breakfast",
            "instructions": "Mix and fry",
            "cooking_time": 20,
            "servings": 4,
            "difficulty": "easy",
        },
        headers=alice["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()
