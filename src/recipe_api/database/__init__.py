"""PostgreSQL database layer.

This module provides:
- Connection pool management
- Repository classes for data access
- Health check utilities
"""

from recipe_api.database.connection import (
    affected_rows,
    check_database_health,
    close_database_pool,
    create_database_pool,
    transaction,
)
from recipe_api.database.repositories import (
    IngredientRepository,
    RecipeRepository,
    UserRepository,
)


__all__ = [
    "IngredientRepository",
    "RecipeRepository",
    "UserRepository",
    "affected_rows",
    "check_database_health",
    "close_database_pool",
    "create_database_pool",
    "transaction",
]
