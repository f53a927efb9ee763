# ABOUTME: Centralized configuration using Pydantic Settings.
# ABOUTME: Loads HTTP, concurrency, logging and server settings from env and .env file.

import subprocess
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from feed_refurb import __version__

APP_NAME = "feed-refurb"
UNKNOWN_SOURCE_VERSION = "unknown"


def detect_source_version() -> str:
    """Short git revision of the working tree, or "unknown" outside a checkout.

    Only used when SOURCE_VERSION is not set in the environment.
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        return UNKNOWN_SOURCE_VERSION

    version = result.stdout.strip()
    if result.returncode != 0 or not version:
        return UNKNOWN_SOURCE_VERSION
    return version


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # HTTP client (shared by feed and article fetches)
    http_timeout: float = 10.0
    user_agent: str | None = None
    source_version: str = Field(default_factory=detect_source_version)

    # Refurbishment
    max_workers: int = 16
    keep_description_on_empty_match: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"

    # Web
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def http_user_agent(self) -> str:
        """User-Agent header sent with every request."""
        if self.user_agent:
            return self.user_agent
        return f"{APP_NAME}/{__version__} ({self.source_version})"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
