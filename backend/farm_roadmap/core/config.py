"""
Application configuration using Pydantic Settings.

Values come from environment variables or a local .env file.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Runtime
    # ===========================================
    DEBUG: bool = True

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./farm_roadmap.db"

    # ===========================================
    # Auth
    # ===========================================
    # When disabled every request runs as the built-in dev farmer.
    AUTH_ENABLED: bool = True

    # ===========================================
    # Logging
    # ===========================================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:8081", "http://localhost:19006"]
    )

    # ===========================================
    # Roadmap rules
    # ===========================================
    UPCOMING_DEFAULT_DAYS: int = Field(default=7, ge=1, le=365)
    MRL_LOOKUP_LIMIT: int = Field(default=10, ge=1)
    # Reject status changes outside the milestone transition table.
    ENFORCE_MILESTONE_TRANSITIONS: bool = True
    # Template used when a requested crop has no entry in the catalog.
    DEFAULT_CROP_TYPE: str = "rice"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
