"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Watch Party API"
    app_version: str = "1.0.0"
    debug: bool = False
    port: int = 3000
    log_level: str = "INFO"

    # Idle-session reaper (seconds)
    # Only sessions with no members are eligible; live sessions are removed eagerly
    session_idle_timeout: int = 3600
    reaper_interval: int = 3600
    reaper_enabled: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
