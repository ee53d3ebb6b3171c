"""User and authentication schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from recipe_api.schemas.base import APIRequest, APIResponse


class RegisterRequest(APIRequest):
    """Body of ``POST /auth/register``."""

    username: str = Field(..., min_length=1, examples=["a"])
    email: str = Field(..., min_length=1, examples=["a@x.com"])
    password: str = Field(..., min_length=1)


class LoginRequest(APIRequest):
    """Body of ``POST /auth/login``."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserUpdate(APIRequest):
    """Body of ``PATCH /auth/profile``; every field is optional."""

    username: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, min_length=1)
    password: str | None = Field(default=None, min_length=1)


class UserResponse(APIResponse):
    """Public view of a user. Never includes the password hash."""

    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime


class AuthResponse(APIResponse):
    """Result of a successful register or login."""

    user: UserResponse
    token: str
