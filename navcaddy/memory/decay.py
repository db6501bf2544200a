"""Exponential half-life decay used to age pattern confidence."""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from ..errors import InvalidArgument

PATTERN_HALF_LIFE_DAYS = 14.0
SECONDS_PER_DAY = 86_400.0


def decay(
    base: float, elapsed_days: float, half_life_days: float = PATTERN_HALF_LIFE_DAYS
) -> float:
    """Return ``base`` halved once per ``half_life_days`` of elapsed time.

    The result stays within ``[0, base]`` for non-negative ``base`` and
    approaches zero without reaching it.
    """

    if half_life_days <= 0:
        raise InvalidArgument(f"half_life_days must be positive, got {half_life_days}")
    if elapsed_days < 0 or math.isnan(elapsed_days):
        raise InvalidArgument(f"elapsed_days must be >= 0, got {elapsed_days}")
    return base * 0.5 ** (elapsed_days / half_life_days)


def elapsed_days(then: datetime, now: datetime) -> float:
    """Fractional days from ``then`` to ``now``; never negative."""

    seconds = (now - then).total_seconds()
    return max(0.0, seconds / SECONDS_PER_DAY)


def within_retention(timestamp: datetime, now: datetime, retention_days: int) -> bool:
    return timestamp >= now - timedelta(days=retention_days)


__all__ = [
    "PATTERN_HALF_LIFE_DAYS",
    "decay",
    "elapsed_days",
    "within_retention",
]
