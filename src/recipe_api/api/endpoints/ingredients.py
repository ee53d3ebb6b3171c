"""Ingredient endpoints, nested under their recipe.

Reading is open to everyone; adding, changing and removing ingredients is
reserved for the owner of the recipe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Path, status
from starlette.responses import Response

from recipe_api.api.dependencies import (
    IngredientRepositoryDep,  # noqa: TC001
    RecipeRepositoryDep,  # noqa: TC001
    load_owned_recipe,
)
from recipe_api.auth.dependencies import CurrentUserDep  # noqa: TC001
from recipe_api.core.exceptions import NotFoundError, store_errors
from recipe_api.observability.logging import get_logger
from recipe_api.schemas import IngredientCreate, IngredientResponse, IngredientUpdate


if TYPE_CHECKING:
    from recipe_api.database.repositories import IngredientRepository


logger = get_logger(__name__)

router = APIRouter(prefix="/recipes/{recipe_id}/ingredients", tags=["Ingredients"])

RecipeId = Annotated[int, Path(description="Recipe id")]
IngredientId = Annotated[int, Path(description="Ingredient id")]

_FORBIDDEN = "Not authorized to modify this recipe"
_INGREDIENT_NOT_FOUND = "Ingredient not found"

_OWNER_ONLY_RESPONSES: dict[int | str, dict[str, str]] = {
    401: {"description": "Authentication required"},
    403: {"description": "Caller does not own the recipe"},
    404: {"description": "Recipe or ingredient not found"},
}


async def _ensure_belongs(
    ingredients: IngredientRepository, ingredient_id: int, recipe_id: int
) -> None:
    ingredient = await ingredients.find_by_id(ingredient_id)
    if ingredient is None or ingredient.recipe_id != recipe_id:
        raise NotFoundError(_INGREDIENT_NOT_FOUND)


@router.get(
    "",
    response_model=list[IngredientResponse],
    summary="List a recipe's ingredients",
)
async def list_ingredients(
    recipe_id: RecipeId,
    ingredients: IngredientRepositoryDep,
) -> list[IngredientResponse]:
    """Ingredients ordered by name. Unknown recipes simply have none."""
    with store_errors("Error fetching ingredients"):
        items = await ingredients.find_by_recipe_id(recipe_id)
    return [IngredientResponse.model_validate(i) for i in items]


@router.post(
    "",
    response_model=IngredientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an ingredient to a recipe",
    responses=_OWNER_ONLY_RESPONSES,
)
async def add_ingredient(
    recipe_id: RecipeId,
    body: IngredientCreate,
    user: CurrentUserDep,
    recipes: RecipeRepositoryDep,
    ingredients: IngredientRepositoryDep,
) -> IngredientResponse:
    with store_errors("Error adding ingredient"):
        await load_owned_recipe(recipes, recipe_id, user, _FORBIDDEN)
        ingredient = await ingredients.create(body.model_dump(), recipe_id)
    return IngredientResponse.model_validate(ingredient)


@router.patch(
    "/{ingredient_id}",
    response_model=IngredientResponse,
    summary="Update an ingredient",
    responses=_OWNER_ONLY_RESPONSES,
)
async def update_ingredient(
    recipe_id: RecipeId,
    ingredient_id: IngredientId,
    body: IngredientUpdate,
    user: CurrentUserDep,
    recipes: RecipeRepositoryDep,
    ingredients: IngredientRepositoryDep,
) -> IngredientResponse:
    with store_errors("Error updating ingredient"):
        await load_owned_recipe(recipes, recipe_id, user, _FORBIDDEN)
        await _ensure_belongs(ingredients, ingredient_id, recipe_id)
        updated = await ingredients.update(ingredient_id, body.changes())
        if updated is None:
            raise NotFoundError(_INGREDIENT_NOT_FOUND)
    return IngredientResponse.model_validate(updated)


@router.delete(
    "/{ingredient_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove an ingredient",
    responses=_OWNER_ONLY_RESPONSES,
)
async def delete_ingredient(
    recipe_id: RecipeId,
    ingredient_id: IngredientId,
    user: CurrentUserDep,
    recipes: RecipeRepositoryDep,
    ingredients: IngredientRepositoryDep,
) -> Response:
    with store_errors("Error deleting ingredient"):
        await load_owned_recipe(recipes, recipe_id, user, _FORBIDDEN)
        await _ensure_belongs(ingredients, ingredient_id, recipe_id)
        if not await ingredients.delete(ingredient_id):
            raise NotFoundError(_INGREDIENT_NOT_FOUND)

    logger.info("Ingredient deleted", ingredient_id=ingredient_id, recipe_id=recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
