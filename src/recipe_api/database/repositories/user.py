"""User data repository.

Passwords are hashed here, on create and on update, so no other layer
ever has to remember to do it.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from recipe_api.auth.passwords import DEFAULT_ROUNDS, hash_password_async
from recipe_api.database.repositories.base import BaseRepository
from recipe_api.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Mapping

    from asyncpg import Connection, Pool, Record

logger = get_logger(__name__)


class UserRecord(BaseModel):
    """Row of the ``users`` table, password hash included."""

    id: int
    username: str
    email: str
    password: str
    created_at: datetime
    updated_at: datetime


_INSERT_USER = """
    INSERT INTO users (username, email, password, created_at, updated_at)
    VALUES ($1, $2, $3, NOW(), NOW())
    RETURNING *
"""


class UserRepository(BaseRepository):
    """Repository for the ``users`` table."""

    table = "users"
    updatable_fields = frozenset({"username", "email", "password"})

    def __init__(self, pool: Pool, *, bcrypt_rounds: int = DEFAULT_ROUNDS) -> None:
        super().__init__(pool)
        self._bcrypt_rounds = bcrypt_rounds

    async def create(
        self,
        username: str,
        email: str,
        password: str,
        conn: Connection | None = None,
    ) -> UserRecord:
        """Insert a user, hashing the plain-text ``password`` first."""
        hashed = await hash_password_async(password, self._bcrypt_rounds)
        async with self._connection(conn) as c:
            row = await c.fetchrow(_INSERT_USER, username, email, hashed)
        user = self._to_record(row)
        logger.info("User created", user_id=user.id)
        return user

    async def find_by_email(
        self, email: str, conn: Connection | None = None
    ) -> UserRecord | None:
        async with self._connection(conn) as c:
            row = await c.fetchrow("SELECT * FROM users WHERE email = $1", email)
        return self._to_record(row) if row is not None else None

    async def find_by_id(
        self, user_id: int, conn: Connection | None = None
    ) -> UserRecord | None:
        async with self._connection(conn) as c:
            row = await c.fetchrow("SELECT * FROM users WHERE id = $1", user_id)
        return self._to_record(row) if row is not None else None

    async def update(
        self,
        user_id: int,
        data: Mapping[str, Any],
        conn: Connection | None = None,
    ) -> UserRecord | None:
        """Change username, email and/or password.

        A supplied plain-text password is hashed before it is stored.
        Returns ``None`` when nothing updatable was supplied or the user
        does not exist.
        """
        updates = self._filter_updates(data)
        if updates.get("password"):
            updates["password"] = await hash_password_async(
                updates["password"], self._bcrypt_rounds
            )
        row = await self._update_row(user_id, updates, conn)
        return self._to_record(row) if row is not None else None

    async def delete(self, user_id: int, conn: Connection | None = None) -> bool:
        return await self._delete_where("id", user_id, conn)

    @staticmethod
    def _to_record(row: Record | Mapping[str, Any]) -> UserRecord:
        return UserRecord(**dict(row))
