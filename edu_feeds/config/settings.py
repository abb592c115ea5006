"""Pydantic Settings for the feed service.

All environment variables use the FEEDS_ prefix.
Example: FEEDS_PORT=3001, FEEDS_REFRESH_CRON="30 2 * * *"
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

_BUNDLED_SOURCES = str(Path(__file__).with_name("sources.yaml"))


class FeedSettings(BaseSettings):
    """Feed service configuration validated from environment variables."""

    # Service
    host: str = "0.0.0.0"
    port: int = Field(default=3001, ge=1, le=65535)
    log_level: str = "INFO"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Fetching
    fetch_timeout_seconds: float = Field(default=15.0, gt=0)
    fetch_max_retries: int = Field(default=2, ge=0, le=10)
    fetch_retry_backoff_seconds: float = Field(default=1.0, ge=0)
    user_agent: str = "Mozilla/5.0 (compatible; edu-feeds/1.0)"

    # Refresh schedule (crontab syntax, daily at midnight by default)
    refresh_cron: str = "0 0 * * *"
    refresh_timezone: str = "UTC"
    refresh_on_startup: bool = True

    # Upstream source definitions
    sources_path: str = _BUNDLED_SOURCES

    model_config = {"env_prefix": "FEEDS_"}
