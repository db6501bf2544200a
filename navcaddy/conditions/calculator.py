"""Deterministic carry adjustment for wind and temperature."""

from __future__ import annotations

from ..errors import InvalidArgument
from .models import STANDARD_TEMP_C, ConditionsAdjustment, WeatherData

TEMP_CARRY_PER_DEG = 0.005  # carry lost per °C below standard
WIND_CARRY_PER_MPS = 0.01  # ±1% per m/s along the target line
_SIGNIFICANT_TEMP_DELTA = 5.0
_SIGNIFICANT_WIND_MPS = 1.0


def _validate(target_bearing: int, base_carry_meters: int) -> None:
    if not 0 <= target_bearing <= 359:
        raise InvalidArgument(
            f"target_bearing must be within 0..359, got {target_bearing}"
        )
    if base_carry_meters <= 0:
        raise InvalidArgument(
            f"base_carry_meters must be positive, got {base_carry_meters}"
        )


class ConditionsCalculator:
    """Combine air density, temperature and wind into a carry modifier."""

    def calculate_adjustment(
        self, weather: WeatherData, target_bearing: int, base_carry_meters: int
    ) -> ConditionsAdjustment:
        _validate(target_bearing, base_carry_meters)

        wind = weather.wind_component(target_bearing)
        air_density = weather.air_density_proxy()
        temp_effect = (
            1.0 - (STANDARD_TEMP_C - weather.temperature_celsius) * TEMP_CARRY_PER_DEG
        )
        wind_effect = 1.0 + wind.headwind * WIND_CARRY_PER_MPS
        modifier = air_density * temp_effect * wind_effect

        adjusted = int(base_carry_meters * modifier)
        reason = _build_reason(
            adjusted - base_carry_meters, weather.temperature_celsius, wind.headwind
        )
        return ConditionsAdjustment(carry_modifier=modifier, reason=reason)

    def calculate_carry(
        self, weather: WeatherData, target_bearing: int, base_carry_meters: int
    ) -> int:
        adjustment = self.calculate_adjustment(
            weather, target_bearing, base_carry_meters
        )
        return adjustment.adjusted_carry(base_carry_meters)


def _build_reason(delta: int, temperature_c: float, headwind: float) -> str:
    if delta == 0:
        return "No adjustment (ideal conditions)"

    factors: list[str] = []
    temp_delta = temperature_c - STANDARD_TEMP_C
    if temp_delta < -_SIGNIFICANT_TEMP_DELTA:
        factors.append(f"cold air ({int(temperature_c)}°C)")
    elif temp_delta > _SIGNIFICANT_TEMP_DELTA:
        factors.append(f"warm air ({int(temperature_c)}°C)")

    if abs(headwind) > _SIGNIFICANT_WIND_MPS:
        kind = "tailwind" if headwind > 0 else "headwind"
        factors.append(f"{int(abs(headwind))}m/s {kind}")

    sign = "+" if delta > 0 else "-"
    detail = ", ".join(factors) if factors else "conditions"
    return f"{sign}{abs(delta)}m due to {detail}"


__all__ = ["ConditionsCalculator", "TEMP_CARRY_PER_DEG", "WIND_CARRY_PER_MPS"]
