"""Worker configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore", # Allow extra env vars without failing
    )

    # App
    app_name: str = "taskloop"
    log_level: str = "INFO"

    # Worker loop
    # Wait applied after a failed iteration (WORKER_DEFAULT_DELAY_SECONDS)
    worker_default_delay_seconds: float = Field(default=30.0, ge=0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
