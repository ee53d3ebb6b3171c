"""Base schema configuration for all Pydantic models.

Usage:
    - APIRequest: for incoming request bodies
    - APIResponse: for outgoing response bodies
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _BaseSchema(BaseModel):
    """Private base schema with common configuration."""

    model_config = ConfigDict(
        use_enum_values=True,
        validate_default=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas.

    Unknown properties are dropped, which is what keeps partial updates
    limited to the declared columns.
    """

    model_config = ConfigDict(extra="ignore")

    def changes(self) -> dict[str, object]:
        """Fields the client actually supplied with a non-null value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas.

    Built from database records by attribute access, so columns that are
    not declared here (the password hash) can never leak into a payload.
    """

    model_config = ConfigDict(extra="forbid", from_attributes=True)
