"""Application configuration and settings management."""
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me"

_VALID_ENVS = {"local", "dev", "prod"}
_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Global application settings loaded from environment variables or .env."""

    model_config = SettingsConfigDict(
        env_file=(Path(__file__).resolve().parent.parent / ".." / ".env"),
        env_file_encoding="utf-8",
        env_prefix="NOTES_",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = "Notekeeper"
    env: str = "local"
    secret_key: str = DEFAULT_SECRET_KEY

    # Database
    database_url: str = "sqlite+aiosqlite:///./notes.db"

    # Security
    # Tokens cannot be revoked, so this is the only limit on a leaked token's lifetime.
    access_token_expire_minutes: int = 60 * 12
    token_salt: str = "notekeeper-auth"
    allowed_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Logging; empty means derive from env
    log_level: str = ""

    # Pagination
    default_page_size: int = 3
    max_page_size: int = 100

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: List[str] | str) -> List[str]:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("env")
    @classmethod
    def _check_env(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in _VALID_ENVS:
            raise ValueError(f"env must be one of {sorted(_VALID_ENVS)}, got {value!r}")
        return normalized

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.strip().upper()
        if upper and upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log_level {value!r}. Must be one of: {sorted(_VALID_LOG_LEVELS)}")
        return upper

    @property
    def access_token_expire_seconds(self) -> int:
        return self.access_token_expire_minutes * 60

    def validate_for_environment(self) -> None:
        """Refuse to run production with the development signing key."""

        if self.env != "prod":
            return
        if self.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError("NOTES_SECRET_KEY must be set in prod")
        if len(self.secret_key) < 32:
            raise ValueError("NOTES_SECRET_KEY must be at least 32 characters in prod")


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings instance."""

    return Settings()
