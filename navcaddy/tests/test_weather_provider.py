from __future__ import annotations

import asyncio
from typing import List

import httpx
import pytest

from navcaddy.conditions.models import Location
from navcaddy.providers.cache import ProviderCache
from navcaddy.providers.errors import ProviderError
from navcaddy.providers.weather import OpenMeteoWeatherSource

LOCATION = Location(latitude=36.5686, longitude=-121.9505)

PAYLOAD = {
    "current": {
        "time": "2026-05-01T12:00",
        "temperature_2m": 18.4,
        "relative_humidity_2m": 62,
        "wind_speed_10m": 4.2,
        "wind_direction_10m": 270.4,
    }
}


def _source(handler, requests: List[httpx.Request] | None = None) -> OpenMeteoWeatherSource:
    def recording(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    return OpenMeteoWeatherSource(client=client, cache=ProviderCache("test", 600))


def test_parses_current_conditions_and_caches() -> None:
    requests: List[httpx.Request] = []
    source = _source(lambda request: httpx.Response(200, json=PAYLOAD), requests)

    first = asyncio.run(source.fetch_weather(LOCATION))
    second = asyncio.run(source.fetch_weather(LOCATION))

    assert first.wind_speed_mps == pytest.approx(4.2)
    assert first.wind_degrees == 270
    assert first.temperature_celsius == pytest.approx(18.4)
    assert first.humidity == 62
    assert first.timestamp.tzinfo is not None
    assert second == first
    assert len(requests) == 1
    params = requests[0].url.params
    assert params["wind_speed_unit"] == "ms"
    assert params["timezone"] == "UTC"


def test_http_error_yields_failure_result() -> None:
    source = _source(lambda request: httpx.Response(503))
    result = asyncio.run(source.get_current_weather(LOCATION))
    assert not result.ok
    assert result.data is None
    assert "503" in (result.error or "")


def test_missing_fields_raise_provider_error() -> None:
    source = _source(lambda request: httpx.Response(200, json={"current": {}}))
    with pytest.raises(ProviderError):
        asyncio.run(source.fetch_weather(LOCATION))


def test_transport_error_is_wrapped() -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    result = asyncio.run(_source(fail).get_current_weather(LOCATION))
    assert not result.ok


def test_cache_expiry() -> None:
    clock = {"now": 1000.0}
    cache = ProviderCache("test", 10, time_func=lambda: clock["now"])
    cache.set("k", "v")
    assert cache.get("k") == "v"
    clock["now"] += 10
    assert cache.get("k") is None
