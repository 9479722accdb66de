"""
Function settings using Pydantic.

Provides environment-based configuration loading with XDEPLOYMENT_ prefix.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Function settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="XDEPLOYMENT_",
    )

    # Prefix of every composed resource name
    engine_id: str = "xdeployment"

    # How long the caller may cache a response before calling again
    response_ttl_seconds: int = 60

    # Logging
    log_level: str = "INFO"

    # API
    api_prefix: str = "/v1"
    host: str = "0.0.0.0"
    port: int = 9443


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
