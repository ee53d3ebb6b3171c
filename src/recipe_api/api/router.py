"""API router aggregating all endpoint routers.

Everything here is mounted under the configured ``api.prefix`` (``/api``);
the health endpoints are mounted at the root by the application factory.
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_api.api.endpoints import auth, ingredients, recipes


router = APIRouter()

router.include_router(auth.router)
router.include_router(recipes.router)
router.include_router(ingredients.router)
