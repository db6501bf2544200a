"""Shared pytest fixtures for navcaddy tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from navcaddy.bag.models import Club, ClubType
from navcaddy.config import reset_settings_cache
from navcaddy.memory.models import Lie, MissDirection, PressureContext, Shot

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)

SEVEN_IRON = Club(id="7i", name="7-iron", type=ClubType.IRON, estimated_carry=150)
DRIVER = Club(id="driver", name="Driver", type=ClubType.DRIVER, estimated_carry=230)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("NAVCADDY_BAGS_DIR", str(tmp_path / "bags"))
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: NOW


@pytest.fixture
def make_shot() -> Callable[..., Shot]:
    counter = {"value": 0}

    def factory(
        miss: MissDirection | None = MissDirection.STRAIGHT,
        days_ago: float = 0.0,
        club: Club = SEVEN_IRON,
        pressure: bool = False,
    ) -> Shot:
        counter["value"] += 1
        return Shot(
            id=f"shot-{counter['value']}",
            club=club,
            lie=Lie.FAIRWAY,
            miss_direction=miss,
            hole_number=1,
            pressure_context=PressureContext(is_user_tagged=pressure),
            timestamp=NOW - timedelta(days=days_ago),
        )

    return factory
