"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).
"""

from __future__ import annotations

import re

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_SCHEMA_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = Field(alias="DATABASE_URL")
    db_timezone: str = Field(default="UTC", alias="DB_TIMEZONE")
    db_schema: str | None = Field(default=None, alias="DB_SCHEMA")
    db_pool_max_size: int = Field(default=10, gt=0, alias="DB_POOL_MAX_SIZE")
    query_timeout_ms: int | None = Field(default=None, gt=0, alias="QUERY_TIMEOUT_MS")
    eager_fetch_enabled: bool = Field(default=True, alias="EAGER_FETCH_ENABLED")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    criteria_log_level: str | None = Field(default=None, alias="CRITERIA_LOG_LEVEL")

    @field_validator("db_timezone")
    @classmethod
    def validate_db_timezone_is_utc(cls, value: str) -> str:
        """Validate that the DB timezone is locked to UTC.

        Timestamp range filters are bound as UTC values; any other session timezone is rejected at
        startup.
        """

        if value.upper() != "UTC":
            raise ValueError("DB_TIMEZONE must be UTC")
        return "UTC"

    @field_validator("db_schema")
    @classmethod
    def validate_db_schema(cls, value: str | None) -> str | None:
        if value is not None and not _SCHEMA_RE.match(value):
            raise ValueError(f"Invalid DB_SCHEMA: {value}")
        return value

    @field_validator("log_level", "criteria_log_level")
    @classmethod
    def validate_log_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {value}")
        return level


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
