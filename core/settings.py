"""
Centralized Settings Configuration

Uses Pydantic Settings to load configuration from environment variables
with validation and type coercion.
"""

from typing import Optional
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (any playhouse db_url: sqlite:///..., postgresql://..., postgres+pool://...)
    database_url: str = "sqlite:///season_stats.db"

    # BALLDONTLIE API (source of per-game stat lines)
    # Get a free key at https://app.balldontlie.io
    balldontlie_api_key: Optional[SecretStr] = None
    balldontlie_base_url: str = "https://api.balldontlie.io/v1"

    # Season (start year, e.g. 2024 for 2024-25)
    nba_season: int = 2024

    # Fetch / store tuning
    stats_page_size: int = 100
    stats_page_delay: float = 0.1
    upsert_chunk_size: int = 500

    # Resilience
    retry_max_attempts: int = 3
    retry_base_delay: float = 2.0
    retry_max_delay: float = 30.0
    circuit_breaker_threshold: int = 5
    circuit_breaker_timeout: int = 60
    http_timeout: int = 30

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"
    service_name: str = "season-stats-platform"

    # Pipeline Auth (bearer secret for the cron trigger)
    pipeline_api_token: Optional[SecretStr] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is either json or console."""
        lower_v = v.lower()
        if lower_v not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return lower_v

    @field_validator("stats_page_size", "upsert_chunk_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Page and chunk sizes must be at least 1."""
        if v < 1:
            raise ValueError("must be >= 1")
        return v


# Default settings instance for convenience
# Import this for quick access: from core.settings import settings
settings = Settings()
