"""
Application configuration models and helpers.

Centralizes settings management so both the FastAPI app and the session layer
driving it share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Optional

import os

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file into the environment."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


def _split_csv(value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
    if isinstance(value, tuple):
        return value
    if isinstance(value, list):
        return tuple(value)
    return tuple(item.strip() for item in value.split(",") if item.strip())


class GeminiSettings(BaseSettings):
    """Configuration for Gemini model access."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    api_key: str = Field(..., validation_alias=AliasChoices("GEMINI_API_KEY", "api_key"))
    model_name: str = Field(
        "gemini-2.5-flash",
        validation_alias=AliasChoices("GEMINI_MODEL_NAME", "model_name"),
    )
    vision_model_name: str = Field(
        "gemini-2.5-flash",
        validation_alias=AliasChoices("GEMINI_VISION_MODEL_NAME", "vision_model_name"),
    )


class StorageSettings(BaseSettings):
    """Where uploaded floorplans live and how they are addressed."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    upload_dir: Path = Field(
        Path("uploads"), validation_alias=AliasChoices("UPLOAD_DIR", "upload_dir")
    )
    public_base_url: str = Field(
        "http://localhost:8000",
        validation_alias=AliasChoices("PUBLIC_BASE_URL", "public_base_url"),
        description="Base URL clients use to reach this server; prefixes asset URLs.",
    )
    max_upload_size_mb: int = Field(
        10, validation_alias=AliasChoices("MAX_UPLOAD_SIZE_MB", "max_upload_size_mb")
    )
    allowed_media_types: Annotated[tuple[str, ...], NoDecode] = Field(
        ("image/jpeg", "image/png", "image/webp", "application/pdf"),
        validation_alias=AliasChoices("ALLOWED_UPLOAD_TYPES", "allowed_media_types"),
    )

    @field_validator("allowed_media_types", mode="before")
    @classmethod
    def _split_media_types(
        cls, value: str | tuple[str, ...] | list[str]
    ) -> tuple[str, ...]:
        """Support providing media types as a comma-separated string."""
        return _split_csv(value)

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


class ClientSettings(BaseSettings):
    """Settings for the session layer talking to the HTTP API."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    api_base_url: str = Field(
        "http://localhost:8000",
        validation_alias=AliasChoices("ARCHITECT_API_BASE_URL", "api_base_url"),
    )
    timeout_seconds: float = Field(
        60.0, validation_alias=AliasChoices("ARCHITECT_API_TIMEOUT", "timeout_seconds")
    )
    retry_attempts: int = Field(
        1,
        ge=1,
        validation_alias=AliasChoices("ARCHITECT_API_RETRY_ATTEMPTS", "retry_attempts"),
        description="Total attempts per request. 1 disables retries.",
    )
    discard_orphaned_assets: bool = Field(
        True,
        validation_alias=AliasChoices("ARCHITECT_DISCARD_ORPHANS", "discard_orphaned_assets"),
        description="Delete a stored floorplan when its analysis fails.",
    )


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    environment: str = Field(
        "development", validation_alias=AliasChoices("APP_ENV", "environment")
    )
    log_level: str = Field(
        "INFO", validation_alias=AliasChoices("APP_LOG_LEVEL", "log_level")
    )
    cors_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        ("http://localhost:3000", "http://localhost:8000"),
        validation_alias=AliasChoices("CORS_ORIGINS", "cors_origins"),
    )
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)
    frontend_base_url: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("FRONTEND_BASE_URL", "frontend_base_url"),
        description="Optional URL of a browser front-end allowed to call the API.",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(
        cls, value: str | tuple[str, ...] | list[str]
    ) -> tuple[str, ...]:
        return _split_csv(value)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "ClientSettings",
    "GeminiSettings",
    "StorageSettings",
    "get_settings",
]
