"""FastAPI security dependencies.

``get_current_user`` is the authentication gate: it turns the bearer token
of the request into a ``CurrentUser`` or rejects the request with 401.
"""

from __future__ import annotations

from typing import Annotated

import asyncpg
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from recipe_api.api.dependencies import get_app_settings, get_user_repository
from recipe_api.auth.jwt import TokenError, decode_token
from recipe_api.core.config import Settings
from recipe_api.core.exceptions import UnauthorizedError
from recipe_api.database.repositories import UserRepository
from recipe_api.observability.logging import bind_context, get_logger


logger = get_logger(__name__)

bearer_scheme = HTTPBearer(
    scheme_name="JWT",
    description="JWT Bearer token authentication",
    auto_error=False,
)


class CurrentUser(BaseModel):
    """The authenticated caller, as loaded from the users table."""

    id: int
    username: str
    email: str


async def get_current_user(
    request: Request,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    users: Annotated[UserRepository, Depends(get_user_repository)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CurrentUser:
    """Resolve the caller from the ``Authorization: Bearer`` header.

    Raises:
        UnauthorizedError: If the token is missing, malformed, expired,
            has a bad signature or names a user that no longer exists.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError

    try:
        payload = decode_token(credentials.credentials, settings=settings)
    except TokenError:
        raise UnauthorizedError from None

    try:
        user = await users.find_by_id(payload.user_id)
    except (asyncpg.PostgresError, OSError):
        logger.exception("User lookup failed during authentication")
        raise UnauthorizedError from None

    if user is None:
        logger.info("Token names a missing user", user_id=payload.user_id)
        raise UnauthorizedError

    bind_context(user_id=user.id)
    # Request-scoped copy for middleware that runs outside this task.
    request.state.user_id = user.id
    return CurrentUser(id=user.id, username=user.username, email=user.email)


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
