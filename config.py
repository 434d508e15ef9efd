"""
Configuration settings for the drillkit engine and its terminal driver.

Uses Pydantic Settings for environment variable management with .env file support.
Every field can be overridden with a DRILL_-prefixed environment variable,
e.g. DRILL_OPTION_COUNT=6.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DRILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Session
    # ========================================
    option_count: int = Field(
        default=4,
        ge=2,
        le=10,
        description="Options shown per question in choice modes (correct answer included)",
    )
    default_mode: Literal[
        "forward-choice",
        "reverse-choice",
        "forward-free-entry",
        "reverse-free-entry",
    ] = Field(
        default="forward-choice",
        description="Game mode used when none is given",
    )
    session_limit: int = Field(
        default=0,
        ge=0,
        description="Maximum items per session (0 = every item in the selection)",
    )
    random_seed: int | None = Field(
        default=None,
        description="Seed for session shuffling and option generation (None = nondeterministic)",
    )

    # ========================================
    # Content
    # ========================================
    content_dir: Path | None = Field(
        default=None,
        description="Directory holding <domain>.json content files (None = bundled data)",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Minimum level written to stderr by the CLI",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
