"""Ownership rules for recipe resources.

A recipe, and every ingredient hanging off it, may only be changed by the
user who created the recipe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from recipe_api.auth.dependencies import CurrentUser
    from recipe_api.database.repositories import RecipeRecord


def is_recipe_owner(recipe: RecipeRecord, user: CurrentUser) -> bool:
    """Check whether ``user`` owns ``recipe``."""
    return recipe.user_id == user.id
