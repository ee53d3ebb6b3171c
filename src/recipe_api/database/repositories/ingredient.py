"""Ingredient data repository."""

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


class IngredientRecord(BaseModel):
    """Row of the ``ingredients`` table."""

    id: int
    name: str
    amount: float | None = None
    unit: str | None = None
    recipe_id: int
    created_at: datetime
    updated_at: datetime


_INSERT_INGREDIENT = """
    INSERT INTO ingredients (name, amount, unit, recipe_id, created_at, updated_at)
    VALUES ($1, $2, $3, $4, NOW(), NOW())
    RETURNING *
"""


class IngredientRepository(BaseRepository):
    """Repository for the ``ingredients`` table."""

    table = "ingredients"
    updatable_fields = frozenset({"name", "amount", "unit"})

    async def create(
        self,
        data: Mapping[str, Any],
        recipe_id: int,
        conn: Connection | None = None,
    ) -> IngredientRecord:
        async with self._connection(conn) as c:
            row = await c.fetchrow(
                _INSERT_INGREDIENT,
                data.get("name"),
                data.get("amount"),
                data.get("unit"),
                recipe_id,
            )
        ingredient = self._to_record(row)
        logger.debug("Ingredient created", ingredient_id=ingredient.id, recipe_id=recipe_id)
        return ingredient

    async def find_by_id(
        self, ingredient_id: int, conn: Connection | None = None
    ) -> IngredientRecord | None:
        async with self._connection(conn) as c:
            row = await c.fetchrow(
                "SELECT * FROM ingredients WHERE id = $1", ingredient_id
            )
        return self._to_record(row) if row is not None else None

    async def find_by_recipe_id(
        self, recipe_id: int, conn: Connection | None = None
    ) -> list[IngredientRecord]:
        """Ingredients of one recipe, ordered by name."""
        async with self._connection(conn) as c:
            rows = await c.fetch(
                "SELECT * FROM ingredients WHERE recipe_id = $1 ORDER BY name",
                recipe_id,
            )
        return [self._to_record(row) for row in rows]

    async def update(
        self,
        ingredient_id: int,
        data: Mapping[str, Any],
        conn: Connection | None = None,
    ) -> IngredientRecord | None:
        row = await self._update_row(ingredient_id, data, conn)
        return self._to_record(row) if row is not None else None

    async def delete(self, ingredient_id: int, conn: Connection | None = None) -> bool:
        return await self._delete_where("id", ingredient_id, conn)

    async def delete_by_recipe_id(
        self, recipe_id: int, conn: Connection | None = None
    ) -> bool:
        """Remove every ingredient of a recipe; True if there were any."""
        return await self._delete_where("recipe_id", recipe_id, conn)

    @staticmethod
    def _to_record(row: Record | Mapping[str, Any]) -> IngredientRecord:
        return IngredientRecord(**dict(row))
