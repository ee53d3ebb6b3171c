"""Recipe data repository."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from recipe_api.database.repositories.base import BaseRepository
from recipe_api.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Mapping

    from asyncpg import Connection, Record

logger = get_logger(__name__)


class RecipeRecord(BaseModel):
    """Row of the ``recipes`` table."""

    id: int
    title: str
    description: str | None = None
    instructions: str
    cooking_time: int | None = None
    servings: int | None = None
    difficulty: str | None = None
    user_id: int
    created_at: datetime
    updated_at: datetime


RECIPE_FIELDS = (
    "title",
    "description",
    "instructions",
    "cooking_time",
    "servings",
    "difficulty",
)

_INSERT_RECIPE = """
    INSERT INTO recipes (
        title, description, instructions, cooking_time, servings,
        difficulty, user_id, created_at, updated_at
    )
    VALUES ($1, $2, $3, $4, $5, $6, $7, NOW(), NOW())
    RETURNING *
"""

_SEARCH_RECIPES = r"""
    SELECT * FROM recipes
    WHERE title ILIKE $1 ESCAPE '\'
       OR description ILIKE $1 ESCAPE '\'
       OR instructions ILIKE $1 ESCAPE '\'
    ORDER BY created_at DESC
"""


def like_pattern(query: str) -> str:
    """Wrap ``query`` for a substring ILIKE match, escaping its wildcards."""
    escaped = query.replace("\\", "\\\\").replace("%", r"\%").replace("_", r"\_")
    return f"%{escaped}%"


class RecipeRepository(BaseRepository):
    """Repository for the ``recipes`` table."""

    table = "recipes"
    updatable_fields = frozenset(RECIPE_FIELDS)

    async def create(
        self,
        data: Mapping[str, Any],
        user_id: int,
        conn: Connection | None = None,
    ) -> RecipeRecord:
        """Insert a recipe owned by ``user_id``.

        Missing optional attributes are stored as NULL.
        """
        values = [data.get(field) for field in RECIPE_FIELDS]
        async with self._connection(conn) as c:
            row = await c.fetchrow(_INSERT_RECIPE, *values, user_id)
        recipe = self._to_record(row)
        logger.info("Recipe created", recipe_id=recipe.id, user_id=user_id)
        return recipe

    async def find_by_id(
        self, recipe_id: int, conn: Connection | None = None
    ) -> RecipeRecord | None:
        async with self._connection(conn) as c:
            row = await c.fetchrow("SELECT * FROM recipes WHERE id = $1", recipe_id)
        return self._to_record(row) if row is not None else None

    async def find_by_user_id(
        self, user_id: int, conn: Connection | None = None
    ) -> list[RecipeRecord]:
        """All recipes owned by ``user_id``, newest first."""
        async with self._connection(conn) as c:
            rows = await c.fetch(
                "SELECT * FROM recipes WHERE user_id = $1 ORDER BY created_at DESC",
                user_id,
            )
        return [self._to_record(row) for row in rows]

    async def update(
        self,
        recipe_id: int,
        data: Mapping[str, Any],
        conn: Connection | None = None,
    ) -> RecipeRecord | None:
        row = await self._update_row(recipe_id, data, conn)
        return self._to_record(row) if row is not None else None

    async def delete(self, recipe_id: int, conn: Connection | None = None) -> bool:
        return await self._delete_where("id", recipe_id, conn)

    async def search(
        self, query: str, conn: Connection | None = None
    ) -> list[RecipeRecord]:
        """Case-insensitive substring search over title, description and
        instructions, across all users, newest first.

        ``%`` and ``_`` in ``query`` match themselves literally.
        """
        async with self._connection(conn) as c:
            rows = await c.fetch(_SEARCH_RECIPES, like_pattern(query))
        return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: Record | Mapping[str, Any]) -> RecipeRecord:
        return RecipeRecord(**dict(row))
