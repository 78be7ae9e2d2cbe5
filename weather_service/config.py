"""Application configuration from environment variables."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///data/weather.db"

    # Polling
    # Open-Meteo refreshes "current" values every 15 minutes, but the
    # collector polls often so a fresh reading lands soon after it appears
    poll_interval_seconds: int = 10
    run_on_startup: bool = True

    # Target city (fixed for the lifetime of the process)
    city: str = "moscow"

    # Upstream APIs
    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    geocoding_language: str = "ru"
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    request_timeout: float = 10.0

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8080

    # Logging
    log_level: str = "INFO"

    @field_validator("poll_interval_seconds")
    @classmethod
    def _positive_interval(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("poll_interval_seconds must be positive")
        return value

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
