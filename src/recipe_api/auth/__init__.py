"""Authentication and authorization module.

This module provides:
- JWT token creation and validation
- bcrypt password hashing
- Recipe ownership checks

The request dependency lives in ``recipe_api.auth.dependencies``.
"""

from recipe_api.auth.jwt import (
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    create_access_token,
    decode_token,
)
from recipe_api.auth.passwords import hash_password, verify_password
from recipe_api.auth.permissions import is_recipe_owner


__all__ = [
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "create_access_token",
    "decode_token",
    "hash_password",
    "is_recipe_owner",
    "verify_password",
]
