"""FastAPI dependencies for database access.

The connection pool is created during application startup and stored in
``app.state``; repositories are built around it per request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Request

from recipe_api.auth.permissions import is_recipe_owner
from recipe_api.core.config import Settings, get_settings
from recipe_api.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    ServiceUnavailableError,
)
from recipe_api.database.repositories import (
    IngredientRepository,
    RecipeRepository,
    UserRepository,
)


if TYPE_CHECKING:
    from asyncpg import Connection, Pool

    from recipe_api.auth.dependencies import CurrentUser
    from recipe_api.database.repositories import RecipeRecord


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with.

    Falls back to the process-wide settings for apps that were not created
    through the factory.
    """
    settings = getattr(request.app.state, "settings", None)
    return settings if isinstance(settings, Settings) else get_settings()


AppSettingsDep = Annotated[Settings, Depends(get_app_settings)]


async def get_db_pool(request: Request) -> Pool:
    """Get the database pool from app state.

    Raises:
        ServiceUnavailableError: 503 if the pool is not initialized.
    """
    pool: Pool | None = getattr(request.app.state, "db_pool", None)
    if pool is None:
        msg = "Database not available"
        raise ServiceUnavailableError(msg)
    return pool


async def get_user_repository(
    pool: Annotated[Pool, Depends(get_db_pool)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserRepository:
    return UserRepository(pool, bcrypt_rounds=settings.auth.jwt.bcrypt_rounds)


async def get_recipe_repository(
    pool: Annotated[Pool, Depends(get_db_pool)],
) -> RecipeRepository:
    return RecipeRepository(pool)


async def get_ingredient_repository(
    pool: Annotated[Pool, Depends(get_db_pool)],
) -> IngredientRepository:
    return IngredientRepository(pool)


UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
RecipeRepositoryDep = Annotated[RecipeRepository, Depends(get_recipe_repository)]
IngredientRepositoryDep = Annotated[
    IngredientRepository, Depends(get_ingredient_repository)
]


async def load_owned_recipe(
    recipes: RecipeRepository,
    recipe_id: int,
    user: CurrentUser,
    forbidden_message: str,
    conn: Connection | None = None,
) -> RecipeRecord:
    """Fetch a recipe and make sure ``user`` may change it.

    Raises:
        NotFoundError: If the recipe does not exist.
        ForbiddenError: With ``forbidden_message`` if someone else owns it.
    """
    recipe = await recipes.find_by_id(recipe_id, conn)
    if recipe is None:
        msg = "Recipe not found"
        raise NotFoundError(msg)
    if not is_recipe_owner(recipe, user):
        raise ForbiddenError(forbidden_message)
    return recipe
