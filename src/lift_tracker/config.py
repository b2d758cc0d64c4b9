"""Configuration settings for the Lift Tracker."""

from pathlib import Path
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DATA_DIR = Path.home() / ".lift_tracker"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LIFT_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Local durable cache
    db_path: Path = DEFAULT_DATA_DIR / "tracker.db"

    # Remote store (GitHub contents API)
    github_api_url: str = "https://api.github.com"
    commit_message: str = "Update tracker data"
    request_timeout: float = 30.0

    log_level: str = "INFO"

    @field_validator("github_api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
