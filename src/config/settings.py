"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
DATABASE_URL has no default: constructing Settings without it raises,
so the process fails at startup rather than on the first request.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database configuration
    database_url: str
    pool_min_size: int = 2  # Minimum connections in pool
    pool_max_size: int = 10  # Maximum connections in pool

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"

    # Status used for payload validation failures
    validation_error_status: int = 500

    # CORS headers attached to every response
    cors_allow_origin: str = "*"
    cors_allow_methods: str = "GET, POST, DELETE, OPTIONS"
    cors_allow_headers: str = "Content-Type"
    cors_max_age: int = 86400


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
