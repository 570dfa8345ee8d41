"""
Configuration for the Weather Likelihood Platform

Values are read from environment variables prefixed with ``WEATHER_`` or a
local ``.env`` file, falling back to the defaults below.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WeatherSettings(BaseSettings):
    """Runtime configuration shared by connectors, API and dashboard"""

    # Geocoding
    nominatim_url: str = Field(
        default="https://nominatim.openstreetmap.org/search",
        description="Nominatim search endpoint"
    )
    user_agent: str = Field(
        default="(WeatherLikelihoodPlatform, contact@example.com)",
        description="User-Agent sent to Nominatim (required by its usage policy)"
    )

    # Open-Meteo
    forecast_url: str = Field(default="https://api.open-meteo.com/v1/forecast")
    archive_url: str = Field(default="https://archive-api.open-meteo.com/v1/archive")
    archive_lag_days: int = Field(
        default=5, ge=0,
        description="Dates older than this many days are served from the archive API"
    )
    forecast_days: int = Field(default=7, ge=1, le=16)

    request_timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> WeatherSettings:
    """Return the process-wide settings instance"""
    return WeatherSettings()
