"""Shared plumbing for the entity repositories.

Repositories speak raw parameterized SQL through asyncpg. Each one is
built around a pool handed in by the caller; every method also takes an
optional ``conn`` so several statements can share one transaction.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, ClassVar

from recipe_api.database.connection import affected_rows
from recipe_api.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping

    from asyncpg import Connection, Pool, Record

logger = get_logger(__name__)


class BaseRepository:
    """Pool handling and allow-listed partial updates for one table."""

    table: ClassVar[str]
    updatable_fields: ClassVar[frozenset[str]]

    def __init__(self, pool: Pool) -> None:
        self._pool = pool

    @property
    def pool(self) -> Pool:
        return self._pool

    @asynccontextmanager
    async def _connection(
        self, conn: Connection | None = None
    ) -> AsyncIterator[Connection]:
        """Use ``conn`` when given, otherwise borrow one from the pool."""
        if conn is not None:
            yield conn
            return
        async with self._pool.acquire() as pooled:
            yield pooled

    def _filter_updates(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Keep only the columns this table allows a client to change."""
        return {k: v for k, v in data.items() if k in self.updatable_fields}

    async def _update_row(
        self,
        row_id: int,
        data: Mapping[str, Any],
        conn: Connection | None = None,
    ) -> Record | None:
        """Apply an allow-listed partial update and return the new row.

        Returns ``None`` without touching the database when no allowed
        column is present, or when no row has ``row_id``.
        """
        updates = self._filter_updates(data)
        if not updates:
            logger.debug("No updatable fields supplied", table=self.table, id=row_id)
            return None

        assignments = ", ".join(
            f"{column} = ${index}" for index, column in enumerate(updates, start=2)
        )
        # Column names come from the class-level allow-list, never from input.
        query = (
            f"UPDATE {self.table} SET {assignments}, updated_at = NOW() "  # noqa: S608
            "WHERE id = $1 RETURNING *"
        )
        async with self._connection(conn) as c:
            return await c.fetchrow(query, row_id, *updates.values())

    async def _delete_where(
        self,
        column: str,
        value: Any,
        conn: Connection | None = None,
    ) -> bool:
        """Delete rows matching ``column = value``; True if any row went away."""
        query = f"DELETE FROM {self.table} WHERE {column} = $1"  # noqa: S608
        async with self._connection(conn) as c:
            status = await c.execute(query, value)
        return affected_rows(status) > 0
