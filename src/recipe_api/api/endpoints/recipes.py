"""Recipe endpoints.

Provides:
- POST /recipes for creating a recipe owned by the caller
- GET /recipes for listing the caller's recipes
- GET /recipes/search/{query} for searching all recipes
- GET /recipes/{recipe_id} for one recipe with its ingredients
- PATCH /recipes/{recipe_id} and DELETE /recipes/{recipe_id} for the owner
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, status
from starlette.responses import Response

from recipe_api.api.dependencies import (
    IngredientRepositoryDep,  # noqa: TC001
    RecipeRepositoryDep,  # noqa: TC001
    load_owned_recipe,
)
from recipe_api.auth.dependencies import CurrentUserDep  # noqa: TC001
from recipe_api.core.exceptions import NotFoundError, store_errors
from recipe_api.database.connection import transaction
from recipe_api.observability.logging import get_logger
from recipe_api.schemas import (
    IngredientResponse,
    RecipeCreate,
    RecipeDetailResponse,
    RecipeResponse,
    RecipeUpdate,
)


logger = get_logger(__name__)

router = APIRouter(prefix="/recipes", tags=["Recipes"])

RecipeId = Annotated[int, Path(description="Recipe id")]

_RECIPE_NOT_FOUND = "Recipe not found"


@router.post(
    "",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe",
    responses={401: {"description": "Authentication required"}},
)
async def create_recipe(
    body: RecipeCreate,
    user: CurrentUserDep,
    recipes: RecipeRepositoryDep,
) -> RecipeResponse:
    with store_errors("Error creating recipe"):
        recipe = await recipes.create(body.model_dump(), user.id)
    return RecipeResponse.model_validate(recipe)


@router.get(
    "",
    response_model=list[RecipeResponse],
    summary="List the caller's recipes",
    responses={401: {"description": "Authentication required"}},
)
async def list_my_recipes(
    user: CurrentUserDep,
    recipes: RecipeRepositoryDep,
) -> list[RecipeResponse]:
    """Recipes owned by the caller, newest first."""
    with store_errors("Error fetching recipes"):
        records = await recipes.find_by_user_id(user.id)
    return [RecipeResponse.model_validate(r) for r in records]


# Registered before /{recipe_id} so "search" is never taken for an id.
@router.get(
    "/search/{query}",
    response_model=list[RecipeResponse],
    summary="Search recipes",
    description=(
        "Case-insensitive substring match on title, description and "
        "instructions across every user's recipes."
    ),
)
async def search_recipes(
    query: Annotated[str, Path(min_length=1)],
    recipes: RecipeRepositoryDep,
) -> list[RecipeResponse]:
    with store_errors("Error searching recipes"):
        records = await recipes.search(query)
    return [RecipeResponse.model_validate(r) for r in records]


@router.get(
    "/{recipe_id}",
    response_model=RecipeDetailResponse,
    summary="Get a recipe with its ingredients",
    responses={404: {"description": "Recipe not found"}},
)
async def get_recipe(
    recipe_id: RecipeId,
    recipes: RecipeRepositoryDep,
    ingredients: IngredientRepositoryDep,
) -> RecipeDetailResponse:
    with store_errors("Error fetching recipe"):
        recipe = await recipes.find_by_id(recipe_id)
        if recipe is None:
            raise NotFoundError(_RECIPE_NOT_FOUND)
        items = await ingredients.find_by_recipe_id(recipe_id)

    return RecipeDetailResponse.model_validate(
        {
            **recipe.model_dump(),
            "ingredients": [IngredientResponse.model_validate(i) for i in items],
        }
    )


@router.patch(
    "/{recipe_id}",
    response_model=RecipeResponse,
    summary="Update a recipe",
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Caller does not own the recipe"},
        404: {"description": "Recipe not found"},
    },
)
async def update_recipe(
    recipe_id: RecipeId,
    body: RecipeUpdate,
    user: CurrentUserDep,
    recipes: RecipeRepositoryDep,
) -> RecipeResponse:
    """Apply a partial update. A body with no recognised field yields 404."""
    with store_errors("Error updating recipe"):
        await load_owned_recipe(
            recipes, recipe_id, user, "Not authorized to update this recipe"
        )
        updated = await recipes.update(recipe_id, body.changes())
        if updated is None:
            raise NotFoundError(_RECIPE_NOT_FOUND)
    return RecipeResponse.model_validate(updated)


@router.delete(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a recipe and its ingredients",
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Caller does not own the recipe"},
        404: {"description": "Recipe not found"},
    },
)
async def delete_recipe(
    recipe_id: RecipeId,
    user: CurrentUserDep,
    recipes: RecipeRepositoryDep,
    ingredients: IngredientRepositoryDep,
) -> Response:
    """Remove the ingredients, then the recipe, in one transaction."""
    with store_errors("Error deleting recipe"):
        async with transaction(recipes.pool) as conn:
            await load_owned_recipe(
                recipes, recipe_id, user, "Not authorized to delete this recipe", conn
            )
            await ingredients.delete_by_recipe_id(recipe_id, conn)
            if not await recipes.delete(recipe_id, conn):
                raise NotFoundError(_RECIPE_NOT_FOUND)

    logger.info("Recipe deleted", recipe_id=recipe_id, user_id=user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
