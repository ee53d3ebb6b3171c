"""Ingredient schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from recipe_api.schemas.base import APIRequest, APIResponse


class IngredientCreate(APIRequest):
    """Body of ``POST /recipes/{recipe_id}/ingredients``."""

    name: str = Field(..., min_length=1, examples=["flour"])
    amount: float | None = Field(default=None, examples=[200])
    unit: str | None = Field(default=None, examples=["g"])


class IngredientUpdate(APIRequest):
    name: str | None = Field(default=None, min_length=1)
    amount: float | None = None
    unit: str | None = None


class IngredientResponse(APIResponse):
    id: int
    name: str
    amount: float | None
    unit: str | None
    recipe_id: int
    created_at: datetime
    updated_at: datetime
