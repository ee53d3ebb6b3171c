"""Database repositories for data access."""

from recipe_api.database.repositories.ingredient import (
    IngredientRecord,
    IngredientRepository,
)
from recipe_api.database.repositories.recipe import RecipeRecord, RecipeRepository
from recipe_api.database.repositories.user import UserRecord, UserRepository


__all__ = [
    "IngredientRecord",
    "IngredientRepository",
    "RecipeRecord",
    "RecipeRepository",
    "UserRecord",
    "UserRepository",
]
