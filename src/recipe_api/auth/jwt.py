"""JWT token handling.

Tokens carry the user id (``sub``) and email, are signed with the shared
``JWT_SECRET`` and expire after the configured lifetime. There is no
refresh or revocation: expiry is the only way a token stops working.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from pydantic import BaseModel, ValidationError, field_validator

from recipe_api.core.config import get_settings
from recipe_api.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_api.core.config import Settings


logger = get_logger(__name__)

_DURATION = re.compile(r"^\s*(\d+)\s*([a-z]*)\s*$", re.IGNORECASE)

_UNIT_SECONDS = {
    "": 1,
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
    "w": 604800,
    "week": 604800,
    "weeks": 604800,
}


class TokenPayload(BaseModel):
    """Decoded access token claims."""

    sub: str  # user id
    email: str
    exp: datetime
    iat: datetime

    @field_validator("sub")
    @classmethod
    def _numeric_subject(cls, v: str) -> str:
        if not v.isdigit():
            msg = "subject must be a numeric user id"
            raise ValueError(msg)
        return v

    @property
    def user_id(self) -> int:
        return int(self.sub)


class TokenError(Exception):
    """Base exception for token-related errors."""


class TokenExpiredError(TokenError):
    """Raised when a token has expired."""


class TokenInvalidError(TokenError):
    """Raised when a token is malformed or its signature does not verify."""


def parse_expires_in(value: str) -> timedelta:
    """Convert a lifetime string such as ``"3600"``, ``"30m"`` or ``"7d"``.

    Bare numbers are seconds.

    Raises:
        ValueError: If the string is not ``<digits><unit>`` with a known unit.
    """
    match = _DURATION.match(value)
    if match is None:
        msg = f"Invalid token lifetime: {value!r}"
        raise ValueError(msg)
    amount, unit = match.groups()
    try:
        seconds = _UNIT_SECONDS[unit.lower()]
    except KeyError:
        msg = f"Unknown time unit in token lifetime: {value!r}"
        raise ValueError(msg) from None
    return timedelta(seconds=int(amount) * seconds)


def create_access_token(
    user_id: int,
    email: str,
    *,
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """Sign a token for ``user_id``.

    Args:
        user_id: Id of the authenticated user.
        email: Email of the authenticated user.
        expires_delta: Custom lifetime. Defaults to ``JWT_EXPIRES_IN``.
        settings: Settings override, mostly for tests.

    Returns:
        Encoded JWT string.
    """
    settings = settings or get_settings()
    if expires_delta is None:
        expires_delta = parse_expires_in(settings.jwt_expires_in)

    now = datetime.now(UTC)
    claims = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(
        claims,
        settings.require_jwt_secret(),
        algorithm=settings.auth.jwt.algorithm,
    )


def decode_token(token: str, *, settings: Settings | None = None) -> TokenPayload:
    """Verify signature and expiry and return the claims.

    Raises:
        TokenExpiredError: If the token has expired.
        TokenInvalidError: If the token is malformed, tampered with or
            missing required claims.
    """
    settings = settings or get_settings()

    try:
        claims = jwt.decode(
            token,
            settings.require_jwt_secret(),
            algorithms=[settings.auth.jwt.algorithm],
        )
        payload = TokenPayload(**claims)
    except ExpiredSignatureError as e:
        logger.debug("Token expired", error=str(e))
        msg = "Token has expired"
        raise TokenExpiredError(msg) from e
    except (JWTError, ValidationError) as e:
        logger.warning("Invalid token", error=str(e))
        msg = "Invalid token"
        raise TokenInvalidError(msg) from e

    return payload
