"""Unit tests for request and response schemas."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from recipe_api.database.repositories import UserRecord
from recipe_api.schemas import (
    Difficulty,
    IngredientUpdate,
    RecipeCreate,
    RecipeUpdate,
    RegisterRequest,
    UserResponse,
    UserUpdate,
)


pytestmark = pytest.mark.unit


class TestPartialUpdates:
    def test_changes_contain_only_supplied_fields(self) -> None:
        update = RecipeUpdate.model_validate({"title": "New", "servings": None})

        assert update.changes() == {"title": "New"}

    def test_unknown_fields_are_dropped(self) -> None:
        update = UserUpdate.model_validate({"username": "b", "id": 7, "is_admin": True})

        assert update.changes() == {"username": "b"}

    def test_empty_body_has_no_changes(self) -> None:
        assert IngredientUpdate.model_validate({}).changes() == {}

    def test_difficulty_is_plain_string(self) -> None:
        update = RecipeUpdate.model_validate({"difficulty": "hard"})

        assert update.changes() == {"difficulty": "hard"}


class TestRecipeCreate:
    def test_requires_title_and_instructions(self) -> None:
        with pytest.raises(ValidationError):
            RecipeCreate.model_validate({"title": "Soup"})

    def test_rejects_unknown_difficulty(self) -> None:
        with pytest.raises(ValidationError):
            RecipeCreate.model_validate(
                {"title": "Soup", "instructions": "Boil", "difficulty": "extreme"}
            )

    def test_difficulty_values(self) -> None:
        assert [d.value for d in Difficulty] == ["easy", "medium", "hard"]


class TestUserSchemas:
    def test_register_requires_all_fields(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest.model_validate({"email": "a@x.com", "password": "p"})

    def test_password_is_kept_verbatim(self) -> None:
        request = RegisterRequest(username="a", email="a@x.com", password=" p ")

        assert request.password == " p "

    def test_response_never_exposes_password(self) -> None:
        now = datetime(2024, 1, 1, tzinfo=UTC)
        record = UserRecord(
            id=1,
            username="a",
            email="a@x.com",
            password="$2b$04$hash",
            created_at=now,
            updated_at=now,
        )

        payload = UserResponse.model_validate(record).model_dump()

        assert "password" not in payload
        assert payload["email"] == "a@x.com"
