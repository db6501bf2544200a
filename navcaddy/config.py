"""Configuration helpers for navcaddy."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"


class _Settings(BaseSettings):
    pattern_window_days: int = Field(default=30, ge=1)
    pattern_shot_limit: int = Field(default=50, ge=1)
    retention_days: int = Field(default=90, ge=1)
    default_readiness: int = Field(default=70, ge=0, le=100)
    weather_url: str = _OPEN_METEO_FORECAST_URL
    weather_timeout_s: float = Field(default=5.0, gt=0)
    weather_cache_ttl_s: int = Field(default=600, ge=0)
    bags_dir: str = "var/bags"
    telemetry_enabled: bool = True

    model_config = SettingsConfigDict(
        env_prefix="NAVCADDY_", env_file=".env", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    """Return cached navcaddy settings."""

    return _Settings()


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


__all__ = [
    "get_settings",
    "reset_settings_cache",
]
