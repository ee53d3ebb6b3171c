"""Recipe schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from recipe_api.schemas.base import APIRequest, APIResponse
from recipe_api.schemas.enums import Difficulty
from recipe_api.schemas.ingredient import IngredientResponse


class RecipeCreate(APIRequest):
    """Body of ``POST /recipes``."""

    title: str = Field(..., min_length=1, examples=["Pancakes"])
    description: str | None = None
    instructions: str = Field(..., min_length=1)
    cooking_time: int | None = Field(default=None, description="Minutes")
    servings: int | None = None
    difficulty: Difficulty | None = None


class RecipeUpdate(APIRequest):
    """Body of ``PATCH /recipes/{id}``; every field is optional."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    instructions: str | None = Field(default=None, min_length=1)
    cooking_time: int | None = None
    servings: int | None = None
    difficulty: Difficulty | None = None


class RecipeResponse(APIResponse):
    id: int
    title: str
    description: str | None
    instructions: str
    cooking_time: int | None
    servings: int | None
    difficulty: Difficulty | None
    user_id: int
    created_at: datetime
    updated_at: datetime


class RecipeDetailResponse(RecipeResponse):
    """A recipe together with its ingredients."""

    ingredients: list[IngredientResponse] = Field(default_factory=list)
