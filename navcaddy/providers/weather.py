"""Open-Meteo backed current weather source."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

import httpx

from ..conditions.models import Location, WeatherData
from ..config import get_settings
from ..repositories import WeatherResult, WeatherSource
from .cache import ProviderCache
from .errors import ProviderError

logger = logging.getLogger(__name__)

_CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,wind_speed_10m,wind_direction_10m"


def _cache_key(location: Location) -> str:
    return f"{location.latitude:.3f},{location.longitude:.3f}"


def _parse_current(payload: Dict[str, Any], location: Location) -> WeatherData:
    current = payload.get("current") or {}
    try:
        speed = float(current["wind_speed_10m"])
        direction = int(round(float(current["wind_direction_10m"]))) % 360
        temperature = float(current["temperature_2m"])
        humidity = int(round(float(current["relative_humidity_2m"])))
    except (KeyError, TypeError, ValueError) as exc:
        raise ProviderError("open-meteo current weather missing data") from exc

    observed = current.get("time")
    timestamp = datetime.now(timezone.utc)
    if observed:
        try:
            timestamp = datetime.fromisoformat(str(observed)).replace(
                tzinfo=timezone.utc
            )
        except ValueError:
            logger.debug("open-meteo time unparseable: %s", observed)

    return WeatherData(
        wind_speed_mps=max(0.0, speed),
        wind_degrees=direction,
        temperature_celsius=temperature,
        humidity=min(100, max(0, humidity)),
        timestamp=timestamp,
        location=location,
    )


class OpenMeteoWeatherSource(WeatherSource):
    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        cache: ProviderCache | None = None,
    ) -> None:
        settings = get_settings()
        self._client = client
        self._url = settings.weather_url
        self._timeout = settings.weather_timeout_s
        self._cache = cache or ProviderCache("weather", settings.weather_cache_ttl_s)

    async def _fetch(self, location: Location) -> Dict[str, Any]:
        params = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "current": _CURRENT_FIELDS,
            "wind_speed_unit": "ms",
            "timezone": "UTC",
        }
        try:
            if self._client is not None:
                response = await self._client.get(
                    self._url, params=params, timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(self._url, params=params)
        except httpx.RequestError as exc:
            raise ProviderError(f"open-meteo request failed: {exc}") from exc
        if response.status_code != 200:
            raise ProviderError(f"open-meteo request failed: {response.status_code}")
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError("open-meteo returned invalid JSON") from exc

    async def fetch_weather(self, location: Location) -> WeatherData:
        """Return current weather, raising :class:`ProviderError` on failure."""

        key = _cache_key(location)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        weather = _parse_current(await self._fetch(location), location)
        self._cache.set(key, weather)
        return weather

    async def get_current_weather(self, location: Location) -> WeatherResult:
        try:
            return WeatherResult.success(await self.fetch_weather(location))
        except ProviderError as exc:
            logger.warning(
                "weather_unavailable",
                extra={"provider": "open-meteo", "error": str(exc)},
            )
            return WeatherResult.failure(str(exc))


__all__ = ["OpenMeteoWeatherSource"]
