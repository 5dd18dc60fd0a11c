"""Application settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..common.constants import (
    CHUNK_SIZE,
    DEFAULT_EXTENSIONS,
    HASH_WORKERS,
    MAX_IN_FLIGHT,
    PROGRESS_INTERVAL,
    QUEUE_SIZE,
)


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOCAL_DEDUP_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Scan settings
    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="File extensions to scan (case-insensitive)",
    )
    extension_sensitive: bool = Field(
        default=True,
        description="Only files with the same extension can be duplicates",
    )

    # Hashing
    chunk_size: int = Field(
        default=CHUNK_SIZE,
        gt=0,
        description="Bytes read per chunk while hashing",
    )
    hash_workers: int = Field(
        default=HASH_WORKERS,
        gt=0,
        description="Number of threads reading files concurrently",
    )
    max_in_flight: int = Field(
        default=MAX_IN_FLIGHT,
        gt=0,
        description="Maximum reads outstanding before the hasher stops taking requests",
    )

    # Pipeline
    queue_size: int = Field(
        default=QUEUE_SIZE,
        gt=0,
        description="Capacity of each stage queue",
    )
    progress_interval: int = Field(
        default=PROGRESS_INTERVAL,
        gt=0,
        description="Log progress every N scanned files",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, value: list[str]) -> list[str]:
        """Lowercase extensions and strip a leading dot."""
        return [ext.strip().lower().removeprefix(".") for ext in value]


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset global settings instance."""
    global _settings
    _settings = None
