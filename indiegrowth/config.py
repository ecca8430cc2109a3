"""Application configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from indiegrowth.constants import (
    CONTENT_MAX_CHARS,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_MAX_REDIRECTS,
    MAX_SCRAPES_PER_CLIENT,
    RATE_LIMIT_WINDOW_SECONDS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Later files override earlier ones, so .env.local takes precedence
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["local", "staging", "prod"] = Field(
        default="local", description="Current environment"
    )
    log_level: str = Field(default="INFO", description="Root log level")

    # Observability
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token (optional)"
    )
    sentry_dsn: str | None = Field(
        default=None, description="Sentry DSN for error tracking (optional)"
    )
    sentry_traces_sample_rate: float = Field(
        default=1.0, description="Sentry traces sample rate (0.0 to 1.0)"
    )

    # ==========================================================================
    # Scraper Configuration
    # ==========================================================================
    # Defaults are sourced from indiegrowth/constants.py.

    scraper_timeout_seconds: float = Field(
        default=DEFAULT_HTTP_TIMEOUT_SECONDS,
        gt=0,
        description="HTTP timeout for the scrape request (seconds)",
    )
    scraper_max_redirects: int = Field(
        default=DEFAULT_MAX_REDIRECTS,
        ge=0,
        description="Maximum redirect hops followed per scrape",
    )
    content_max_chars: int = Field(
        default=CONTENT_MAX_CHARS,
        gt=0,
        description="Body text budget stored on the scraped document",
    )

    # ==========================================================================
    # Rate Limiting Configuration
    # ==========================================================================

    rate_limit_max_scrapes: int = Field(
        default=MAX_SCRAPES_PER_CLIENT,
        description="Max scrape requests per client per window",
    )
    rate_limit_window_seconds: int = Field(
        default=RATE_LIMIT_WINDOW_SECONDS,
        description="Rate limit sliding window duration in seconds",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
