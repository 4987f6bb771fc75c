"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env and public/ resolution don't depend on the working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_PUBLIC_DIR = PROJECT_ROOT / "public"

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

# Select the .env file for the current environment
_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=False)


def _build_app_settings() -> "AppSettings":
    """Build app settings from environment."""

    return AppSettings()


def _build_log_settings() -> "LogSettings":
    return LogSettings()


class AppSettings(BaseSettings):
    """Server, asset and rate limit configuration."""

    host: str = Field(
        "0.0.0.0",
        description="Interface the HTTP listener binds to",
    )
    port: int = Field(
        3000,
        description="Listening port",
        validation_alias=AliasChoices("PORT", "APP_PORT"),
        ge=0,
        le=65535,
    )
    public_dir: Path = Field(
        DEFAULT_PUBLIC_DIR,
        description="Directory of static assets served verbatim",
    )
    chips_file: Path | None = Field(
        None,
        description="Chip configuration JSON file (defaults to <public_dir>/chips.json)",
    )
    index_file: Path | None = Field(
        None,
        description="Entry document returned for unmatched routes (defaults to <public_dir>/index.html)",
    )
    api_enabled: bool = Field(
        True,
        description="Expose the /api/chips lookup routes",
    )
    docs_enabled: bool = Field(
        True,
        description="Expose OpenAPI docs under /api/docs",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable rate limiting per client address",
    )
    rate_limit_requests: int = Field(
        300,
        description="Maximum number of requests allowed per window (per client)",
        ge=1,
    )
    rate_limit_window_seconds: int = Field(
        15 * 60,
        description="Rate limit window size in seconds",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include RateLimit-* headers (and Retry-After when throttling)",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
        populate_by_name=True,
    )

    @property
    def resolved_chips_file(self) -> Path:
        return self.chips_file or self.public_dir / "chips.json"

    @property
    def resolved_index_file(self) -> Path:
        return self.index_file or self.public_dir / "index.html"


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log destination: stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Rotate the log file at this size (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(5, description="Rotated log files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header carrying the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a setting is malformed.
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
