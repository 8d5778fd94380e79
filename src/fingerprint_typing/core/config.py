"""Configuration management.

Uses pydantic-settings for type-safe configuration from environment variables.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    All settings can be overridden via environment variables.
    Prefix: FINGERPRINT_TYPING_
    """

    model_config = SettingsConfigDict(
        env_prefix="FINGERPRINT_TYPING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Text fingerprint thresholds
    percent_valid_threshold: float = Field(
        default=0.95,
        ge=0.0,
        le=1.0,
        description="Share of values passing a predicate (JSON, URL, email) to mark the field",
    )
    lower_percent_valid_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Looser share used for noisy predicates such as US state abbreviations",
    )

    # Number fingerprint
    timestamp_year_threshold: int = Field(
        default=20,
        gt=0,
        description="Years around now that quartiles must fall within to be a UNIX timestamp",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")  # 'json' or 'console'


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
