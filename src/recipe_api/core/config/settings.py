"""Application configuration using Pydantic Settings with YAML support.

Configuration is organised in nested sections loaded from YAML files
(``config/base`` plus ``config/environments/{APP_ENV}``). Deployment knobs
and secrets (``DATABASE_URL``, ``JWT_SECRET``, ``JWT_EXPIRES_IN``, ``PORT``)
are top-level fields read from the environment or a ``.env`` file.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, BeforeValidator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


def parse_list(v: str | list[str]) -> list[str]:
    """Parse comma-separated string or list into list of strings."""
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Recipe API"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000


class ApiSettings(BaseModel):
    """API configuration settings."""

    prefix: str = "/api"
    cors_origins: Annotated[list[str], BeforeValidator(parse_list)] = ["*"]


class JwtSettings(BaseModel):
    """Token signing settings."""

    algorithm: str = "HS256"
    expires_in: str = "1d"
    bcrypt_rounds: int = 10


class AuthSettings(BaseModel):
    """Authentication configuration settings."""

    jwt: JwtSettings = JwtSettings()


class DatabaseSettings(BaseModel):
    """PostgreSQL database configuration settings."""

    host: str = "localhost"
    port: int = 5432
    name: str = "recipes"
    user: str | None = None
    min_pool_size: int = 1
    max_pool_size: int = 10
    command_timeout: float = 30.0  # Query timeout in seconds
    ssl: bool = False


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Priority (highest to lowest):
    1. Values passed to ``Settings()``
    2. Environment variables (nested sections via ``__``, e.g. ``DATABASE__HOST``)
    3. ``.env`` file
    4. Environment-specific YAML, then base YAML
    5. Defaults declared here
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    database: DatabaseSettings = DatabaseSettings()
    logging: LoggingSettings = LoggingSettings()

    # =========================================================================
    # Deployment knobs and secrets (from environment / .env only)
    # =========================================================================
    DATABASE_URL: str | None = None
    DATABASE_PASSWORD: str = ""
    JWT_SECRET: str = ""
    JWT_EXPIRES_IN: str | None = None
    PORT: int | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def database_url(self) -> str:
        """PostgreSQL DSN.

        ``DATABASE_URL`` wins when set; otherwise the DSN is assembled from
        the ``database`` section as ``postgresql://[user[:password]@]host:port/name``.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        auth_part = ""
        if self.database.user and self.DATABASE_PASSWORD:
            auth_part = f"{self.database.user}:{self.DATABASE_PASSWORD}@"
        elif self.database.user:
            auth_part = f"{self.database.user}@"

        return (
            f"postgresql://{auth_part}{self.database.host}:"
            f"{self.database.port}/{self.database.name}"
        )

    @property
    def jwt_expires_in(self) -> str:
        """Token lifetime string, e.g. ``"1d"`` or ``"3600"``."""
        return self.JWT_EXPIRES_IN or self.auth.jwt.expires_in

    @property
    def listen_port(self) -> int:
        """Port the HTTP listener binds to."""
        return self.PORT if self.PORT is not None else self.server.port

    def require_jwt_secret(self) -> str:
        """Return the signing secret, refusing to continue without one.

        Raises:
            RuntimeError: If ``JWT_SECRET`` is not configured.
        """
        if not self.JWT_SECRET:
            msg = "JWT_SECRET is not set; refusing to start without a signing secret"
            raise RuntimeError(msg)
        return self.JWT_SECRET

    # =========================================================================
    # Environment Helpers
    # =========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
