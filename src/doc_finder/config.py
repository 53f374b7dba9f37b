"""Centralized configuration for doc-finder using Pydantic Settings."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


SUPPORTED_STORE_SCHEMES = ("memory", "sqlite", "mongodb")


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``DOC_FINDER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_FINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Store settings
    store_url: str = Field(
        default="memory://",
        description="Record store URL: memory://, sqlite:///path/to.db or mongodb://host:port/db",
    )
    mongo_database: str = Field(
        default="docfinder",
        min_length=1,
        description="MongoDB database name used when the store URL does not name one",
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    @field_validator("store_url")
    @classmethod
    def _check_store_url(cls, value: str) -> str:
        scheme, sep, _ = value.partition("://")
        if not sep or scheme.lower() not in SUPPORTED_STORE_SCHEMES:
            raise ValueError(
                f"Unsupported store URL '{value}'. Expected one of: "
                + ", ".join(f"{name}://" for name in SUPPORTED_STORE_SCHEMES)
            )
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if not isinstance(logging.getLevelName(value.upper()), int):
            raise ValueError(f"Unknown log level '{value}'")
        return value.lower()

    def store_scheme(self) -> str:
        """Return the lowercased scheme of ``store_url``."""
        return self.store_url.partition("://")[0].lower()
