"""User registration, login and profile endpoints.

Provides:
- POST /auth/register
- POST /auth/login
- GET /auth/profile
- PATCH /auth/profile
"""

from __future__ import annotations

from fastapi import APIRouter, status

from recipe_api.api.dependencies import (
    AppSettingsDep,  # noqa: TC001
    UserRepositoryDep,  # noqa: TC001
)
from recipe_api.auth.dependencies import CurrentUserDep  # noqa: TC001
from recipe_api.auth.jwt import create_access_token
from recipe_api.auth.passwords import verify_password_async
from recipe_api.core.exceptions import (
    BadRequestError,
    NotFoundError,
    UnauthorizedError,
    store_errors,
)
from recipe_api.observability.logging import get_logger
from recipe_api.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
    UserUpdate,
)


logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

_INVALID_CREDENTIALS = "Invalid email or password"
_USER_NOT_FOUND = "User not found"


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={400: {"description": "Email already registered or invalid body"}},
)
async def register(
    body: RegisterRequest,
    users: UserRepositoryDep,
    settings: AppSettingsDep,
) -> AuthResponse:
    """Create an account and return it together with a fresh token."""
    with store_errors("Error registering user"):
        if await users.find_by_email(body.email) is not None:
            msg = "Email already registered"
            raise BadRequestError(msg)

        user = await users.create(body.username, body.email, body.password)
        token = create_access_token(user.id, user.email, settings=settings)

    logger.info("User registered", user_id=user.id)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in with email and password",
    responses={401: {"description": "Invalid email or password"}},
)
async def login(
    body: LoginRequest,
    users: UserRepositoryDep,
    settings: AppSettingsDep,
) -> AuthResponse:
    """Check credentials and issue a token."""
    with store_errors("Error logging in"):
        user = await users.find_by_email(body.email)
        if user is None:
            raise UnauthorizedError(_INVALID_CREDENTIALS)

        if not await verify_password_async(body.password, user.password):
            logger.info("Login rejected: wrong password", user_id=user.id)
            raise UnauthorizedError(_INVALID_CREDENTIALS)

        token = create_access_token(user.id, user.email, settings=settings)

    logger.info("User logged in", user_id=user.id)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.get(
    "/profile",
    response_model=UserResponse,
    summary="Get the caller's profile",
    responses={401: {"description": "Authentication required"}},
)
async def get_profile(user: CurrentUserDep, users: UserRepositoryDep) -> UserResponse:
    with store_errors("Error fetching profile"):
        record = await users.find_by_id(user.id)
        if record is None:
            raise NotFoundError(_USER_NOT_FOUND)
    return UserResponse.model_validate(record)


@router.patch(
    "/profile",
    response_model=UserResponse,
    summary="Update the caller's profile",
    responses={401: {"description": "Authentication required"}},
)
async def update_profile(
    body: UserUpdate,
    user: CurrentUserDep,
    users: UserRepositoryDep,
) -> UserResponse:
    """Change username, email and/or password.

    A body with no recognised field changes nothing and yields 404.
    """
    with store_errors("Error updating profile"):
        record = await users.update(user.id, body.changes())
        if record is None:
            raise NotFoundError(_USER_NOT_FOUND)

    logger.info("Profile updated", user_id=user.id)
    return UserResponse.model_validate(record)
