"""
Application configuration using Pydantic Settings.

Automatically loads environment variables from .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Remote extraction service (credential and account id are required
    # for real extraction; without them the service runs in mock mode)
    extraction_api_key: str | None = None
    extraction_customer_id: str | None = None
    extraction_base_url: str = "https://llm.blackbox.ai"
    extraction_model: str = "openrouter/claude-sonnet-4"
    extraction_timeout: float = 300.0

    # Language used for weekday names and user-facing messages ("en" or "de")
    schedule_language: str = "en"

    # Debug flags
    debug: bool = False

    model_config = SettingsConfigDict(
        # Load from .env file in the backend directory
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # Case insensitive environment variable names
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration loaded from environment.
    """
    return Settings()
