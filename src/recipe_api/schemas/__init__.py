"""Request and response schemas."""

from recipe_api.schemas.enums import Difficulty
from recipe_api.schemas.health import HealthResponse, ReadinessResponse, RootResponse
from recipe_api.schemas.ingredient import (
    IngredientCreate,
    IngredientResponse,
    IngredientUpdate,
)
from recipe_api.schemas.recipe import (
    RecipeCreate,
    RecipeDetailResponse,
    RecipeResponse,
    RecipeUpdate,
)
from recipe_api.schemas.user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
    UserUpdate,
)


__all__ = [
    "AuthResponse",
    "Difficulty",
    "HealthResponse",
    "IngredientCreate",
    "IngredientResponse",
    "IngredientUpdate",
    "LoginRequest",
    "ReadinessResponse",
    "RecipeCreate",
    "RecipeDetailResponse",
    "RecipeResponse",
    "RecipeUpdate",
    "RegisterRequest",
    "RootResponse",
    "UserResponse",
    "UserUpdate",
]
