from __future__ import annotations

import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

STANDARD_TEMP_C = 15.0
AIR_DENSITY_PER_DEG = 0.002


class Location(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    model_config = ConfigDict(frozen=True)


class WindComponent(BaseModel):
    """Wind resolved against a target line.

    ``headwind`` is positive when the wind helps the shot (following wind) and
    negative when it blows into the player. ``crosswind`` is positive from the
    left.
    """

    headwind: float
    crosswind: float

    model_config = ConfigDict(frozen=True)


class WeatherData(BaseModel):
    wind_speed_mps: float = Field(ge=0)
    wind_degrees: int = Field(ge=0, le=359)
    temperature_celsius: float
    humidity: int = Field(ge=0, le=100)
    timestamp: datetime
    location: Location

    model_config = ConfigDict(frozen=True)

    def wind_component(self, target_bearing: float) -> WindComponent:
        rel = math.radians((self.wind_degrees - target_bearing + 360.0) % 360.0)
        return WindComponent(
            headwind=self.wind_speed_mps * math.cos(rel),
            crosswind=self.wind_speed_mps * math.sin(rel),
        )

    def air_density_proxy(self) -> float:
        """Relative air density; above 1.0 when colder than 15°C."""
        return 1.0 + (STANDARD_TEMP_C - self.temperature_celsius) * AIR_DENSITY_PER_DEG


class ConditionsAdjustment(BaseModel):
    carry_modifier: float
    reason: str

    model_config = ConfigDict(frozen=True)

    def adjusted_carry(self, base_carry_meters: int) -> int:
        return int(base_carry_meters * self.carry_modifier)


__all__ = [
    "Location",
    "WindComponent",
    "WeatherData",
    "ConditionsAdjustment",
]
