from __future__ import annotations

import pytest
from pydantic import ValidationError

from navcaddy.conditions import ConditionsCalculator, Location, WeatherData
from navcaddy.errors import InvalidArgument

from .conftest import NOW

LOCATION = Location(latitude=56.0, longitude=12.7)


def _weather(speed: float = 0.0, degrees: int = 0, temp: float = 15.0) -> WeatherData:
    return WeatherData(
        wind_speed_mps=speed,
        wind_degrees=degrees,
        temperature_celsius=temp,
        humidity=50,
        timestamp=NOW,
        location=LOCATION,
    )


def test_wind_components_along_and_across_target() -> None:
    following = _weather(5.0, 90).wind_component(90)
    assert following.headwind == pytest.approx(5.0)
    assert following.crosswind == pytest.approx(0.0, abs=1e-9)

    into = _weather(5.0, 270).wind_component(90)
    assert into.headwind == pytest.approx(-5.0)

    for degrees in (0, 180):
        across = _weather(5.0, degrees).wind_component(90)
        assert across.headwind == pytest.approx(0.0, abs=1e-9)
        assert abs(across.crosswind) == pytest.approx(5.0)


def test_headwind_reduces_carry() -> None:
    adjustment = ConditionsCalculator().calculate_adjustment(_weather(5.0, 180), 0, 150)
    assert adjustment.carry_modifier == pytest.approx(0.95, abs=0.02)
    assert adjustment.reason.startswith("-")
    assert "headwind" in adjustment.reason


def test_tailwind_increases_carry() -> None:
    adjustment = ConditionsCalculator().calculate_adjustment(_weather(5.0, 0), 0, 150)
    assert adjustment.carry_modifier == pytest.approx(1.05, abs=0.02)
    assert adjustment.reason.startswith("+")
    assert "tailwind" in adjustment.reason


def test_cold_air_without_wind() -> None:
    adjustment = ConditionsCalculator().calculate_adjustment(_weather(temp=0.0), 0, 150)
    assert adjustment.carry_modifier == pytest.approx(0.953, abs=0.01)
    assert "cold air (0°C)" in adjustment.reason


def test_crosswind_has_no_carry_effect() -> None:
    adjustment = ConditionsCalculator().calculate_adjustment(_weather(8.0, 90), 0, 150)
    assert adjustment.carry_modifier == pytest.approx(1.0)
    assert adjustment.reason == "No adjustment (ideal conditions)"


def test_calculate_carry_applies_modifier() -> None:
    calculator = ConditionsCalculator()
    assert calculator.calculate_carry(_weather(5.0, 0), 0, 200) == 210


@pytest.mark.parametrize("bearing", [-1, 360, 361])
def test_invalid_bearing_rejected(bearing: int) -> None:
    with pytest.raises(InvalidArgument):
        ConditionsCalculator().calculate_adjustment(_weather(), bearing, 150)


@pytest.mark.parametrize("carry", [0, -10])
def test_non_positive_carry_rejected(carry: int) -> None:
    with pytest.raises(InvalidArgument):
        ConditionsCalculator().calculate_adjustment(_weather(), 0, carry)


def test_weather_snapshot_validates_ranges() -> None:
    with pytest.raises(ValidationError):
        _weather(speed=-1.0)
    with pytest.raises(ValidationError):
        _weather(degrees=360)
    with pytest.raises(ValidationError):
        Location(latitude=91, longitude=0)


def test_reason_truncates_temperature_and_wind() -> None:
    adjustment = ConditionsCalculator().calculate_adjustment(
        _weather(3.8, 0, temp=-2.6), 0, 150
    )
    assert adjustment.reason.startswith("-")
    assert "cold air (-2°C)" in adjustment.reason
    assert "3m/s tailwind" in adjustment.reason
