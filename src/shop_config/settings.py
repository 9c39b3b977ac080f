"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. SHOP_ENV_FILE environment variable (path to a .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. SHOP_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("SHOP_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Security (MUST be set - the token codec refuses to start without it)
    jwt_secret_key: SecretStr

    # JWT
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_hours: int = 24

    # Sessions default to the bearer token lifetime
    session_expire_hours: int | None = None

    # Password reset
    password_reset_expire_minutes: int = 15

    # Password hashing / policy
    password_min_length: int = 8
    bcrypt_rounds: int = 12

    # Database (explicit URL wins over the POSTGRES_ parts)
    database_url_override: str | None = Field(
        default=None,
        validation_alias="DATABASE_URL",
    )
    database_echo: bool = False
    database_command_timeout: float = 30.0
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("")
    postgres_db: str = "shop"

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("jwt_secret_key")
    @classmethod
    def _validate_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            msg = "JWT_SECRET_KEY cannot be empty"
            raise ValueError(msg)
        return v

    @field_validator(
        "password_reset_expire_minutes",
        "jwt_access_token_expire_hours",
        "session_expire_hours",
    )
    @classmethod
    def _validate_positive(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            msg = "Expiry windows must be positive"
            raise ValueError(msg)
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Construct the database URL from components."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password.get_secret_value()}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def effective_session_expire_hours(self) -> int:
        """Session lifetime, falling back to the access token lifetime."""
        return self.session_expire_hours or self.jwt_access_token_expire_hours


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    JWT_SECRET_KEY must be provided via environment variables or .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
