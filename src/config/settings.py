# src/config/settings.py
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for HTTP, cache and logging settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rangefetch.version import __version__


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === HTTP ===
    http_timeout_s: float = 30.0
    http_user_agent: str = f"rangefetch/{__version__}"
    http_follow_redirects: bool = True

    # === Fetch orchestration ===
    fetch_max_concurrency: int = 0  # 0 = one task per remote page, unbounded

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["memory", "json", "sqlite", "redis"] = "json"
    cache_root: Path = Path("~/.rangefetch/cache")
    cache_redis_url: str = ""
    cache_max_age_s: float | None = 1800.0

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("fetch_max_concurrency")
    @classmethod
    def validate_max_concurrency(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("fetch_max_concurrency must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.http_timeout_s <= 0:
            errors.append("HTTP_TIMEOUT_S must be > 0")

        if self.cache_max_age_s is not None and self.cache_max_age_s < 0:
            errors.append("CACHE_MAX_AGE_S must be >= 0")

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-call config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
