"""Unit tests for the schema bootstrap command."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from recipe_api.database.migrate import SCHEMA_FILE, main, migrate


if TYPE_CHECKING:
    from pathlib import Path


pytestmark = pytest.mark.unit


@pytest.fixture
def conn() -> MagicMock:
    conn = MagicMock()
    conn.fetchval = AsyncMock()
    conn.execute = AsyncMock()
    conn.close = AsyncMock()
    return conn


class TestMigrate:
    async def test_runs_schema(self, conn: MagicMock) -> None:
        with patch(
            "recipe_api.database.migrate.asyncpg.connect",
            new=AsyncMock(return_value=conn),
        ):
            await migrate("postgresql://db/recipes")

        executed = [c.args[0] for c in conn.execute.await_args_list]
        assert executed == [SCHEMA_FILE.read_text(encoding="utf-8")]
        conn.close.assert_awaited_once()

    async def test_plain_connection_by_default(self, conn: MagicMock) -> None:
        with patch(
            "recipe_api.database.migrate.asyncpg.connect",
            new=AsyncMock(return_value=conn),
        ) as connect:
            await migrate("postgresql://db/recipes")

        connect.assert_awaited_once_with("postgresql://db/recipes", ssl=None)

    async def test_requires_tls_when_ssl_enabled(self, conn: MagicMock) -> None:
        with patch(
            "recipe_api.database.migrate.asyncpg.connect",
            new=AsyncMock(return_value=conn),
        ) as connect:
            await migrate("postgresql://db/recipes", ssl=True)

        connect.assert_awaited_once_with("postgresql://db/recipes", ssl="require")

    async def test_runs_seed_after_schema(self, conn: MagicMock, tmp_path: Path) -> None:
        seed = tmp_path / "seed.sql"
        seed.write_text("INSERT INTO users VALUES (1);", encoding="utf-8")

        with patch(
            "recipe_api.database.migrate.asyncpg.connect",
            new=AsyncMock(return_value=conn),
        ):
            await migrate("postgresql://db/recipes", seed_file=seed)

        executed = [c.args[0] for c in conn.execute.await_args_list]
        assert executed[-1] == "INSERT INTO users VALUES (1);"
        assert len(executed) == 2

    async def test_closes_connection_on_failure(self, conn: MagicMock) -> None:
        conn.execute.side_effect = OSError("gone")

        with (
            patch(
                "recipe_api.database.migrate.asyncpg.connect",
                new=AsyncMock(return_value=conn),
            ),
            pytest.raises(OSError, match="gone"),
        ):
            await migrate("postgresql://db/recipes")

        conn.close.assert_awaited_once()


class TestSchemaFile:
    def test_creates_all_tables_idempotently(self) -> None:
        sql = SCHEMA_FILE.read_text(encoding="utf-8")

        for table in ("users", "recipes", "ingredients"):
            assert f"CREATE TABLE IF NOT EXISTS {table}" in sql
        assert "CHECK (difficulty IN ('easy', 'medium', 'hard'))" in sql

    def test_only_email_is_unique_for_users(self) -> None:
        sql = SCHEMA_FILE.read_text(encoding="utf-8")

        assert "email       VARCHAR(255) NOT NULL UNIQUE" in sql
        assert "username    VARCHAR(255) NOT NULL," in sql


class TestMain:
    def test_returns_zero_on_success(self) -> None:
        with (
            patch("recipe_api.database.migrate.setup_logging"),
            patch("recipe_api.database.migrate.migrate", new=AsyncMock()) as run,
        ):
            assert main([]) == 0

        assert run.await_args.kwargs["seed_file"] is None

    def test_passes_ssl_setting(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE__SSL", "true")

        with (
            patch("recipe_api.database.migrate.setup_logging"),
            patch("recipe_api.database.migrate.migrate", new=AsyncMock()) as run,
        ):
            assert main([]) == 0

        assert run.await_args.kwargs["ssl"] is True

    def test_returns_one_on_failure(self) -> None:
        with (
            patch("recipe_api.database.migrate.setup_logging"),
            patch(
                "recipe_api.database.migrate.migrate",
                new=AsyncMock(side_effect=ConnectionRefusedError()),
            ),
        ):
            assert main(["--seed", "seed.sql"]) == 1
