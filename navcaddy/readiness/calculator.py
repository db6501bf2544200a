"""Weighted readiness scoring from wearable metrics."""

from __future__ import annotations

import math
from datetime import datetime, timezone

from .models import (
    MetricScore,
    ReadinessBreakdown,
    ReadinessScore,
    ReadinessSource,
    WearableMetrics,
)

WEIGHT_HRV = 0.4
WEIGHT_SLEEP = 0.4
WEIGHT_STRESS = 0.2
NEUTRAL_SCORE = 50.0

_OPTIMAL_SLEEP_MIN_H = 6.0
_OPTIMAL_SLEEP_MAX_H = 9.0


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def hrv_score(hrv_ms: float) -> float:
    return _clamp(hrv_ms)


def sleep_score_from_duration(sleep_minutes: int) -> float:
    """Score sleep duration; 6-9 hours scores 75-100, less or more scores lower."""

    hours = sleep_minutes / 60.0
    if hours < _OPTIMAL_SLEEP_MIN_H:
        score = (hours / _OPTIMAL_SLEEP_MIN_H) * 75.0
    elif hours <= _OPTIMAL_SLEEP_MAX_H:
        score = 75.0 + ((hours - _OPTIMAL_SLEEP_MIN_H) / 3.0) * 25.0
    else:
        excess = min(hours - _OPTIMAL_SLEEP_MAX_H, 3.0)
        score = 100.0 - (excess / 3.0) * 50.0
    return _clamp(score)


def stress_score(stress: float) -> float:
    return _clamp(100.0 - stress)


class ReadinessCalculator:
    """Combine HRV, sleep and stress into a 0-100 readiness score."""

    def calculate_readiness(self, metrics: WearableMetrics) -> ReadinessScore:
        hrv = hrv_score(metrics.hrv_ms) if metrics.hrv_ms is not None else None

        if metrics.sleep_quality_score is not None:
            sleep = _clamp(metrics.sleep_quality_score)
        elif metrics.sleep_minutes is not None:
            sleep = sleep_score_from_duration(metrics.sleep_minutes)
        else:
            sleep = None

        stress = (
            stress_score(metrics.stress_score)
            if metrics.stress_score is not None
            else None
        )

        breakdown = ReadinessBreakdown(
            hrv=MetricScore(value=hrv, weight=WEIGHT_HRV) if hrv is not None else None,
            sleep_quality=(
                MetricScore(value=sleep, weight=WEIGHT_SLEEP)
                if sleep is not None
                else None
            ),
            stress_level=(
                MetricScore(value=stress, weight=WEIGHT_STRESS)
                if stress is not None
                else None
            ),
        )

        weighted = (
            (hrv if hrv is not None else NEUTRAL_SCORE) * WEIGHT_HRV
            + (sleep if sleep is not None else NEUTRAL_SCORE) * WEIGHT_SLEEP
            + (stress if stress is not None else NEUTRAL_SCORE) * WEIGHT_STRESS
        )
        overall = int(_clamp(math.floor(weighted + 0.5)))

        return ReadinessScore(
            overall=overall,
            breakdown=breakdown,
            timestamp=metrics.timestamp,
            source=ReadinessSource.WEARABLE_SYNC,
        )

    def manual(self, overall: int, now: datetime | None = None) -> ReadinessScore:
        return ReadinessScore(
            overall=overall,
            timestamp=now or datetime.now(timezone.utc),
            source=ReadinessSource.MANUAL_ENTRY,
        )


__all__ = [
    "WEIGHT_HRV",
    "WEIGHT_SLEEP",
    "WEIGHT_STRESS",
    "ReadinessCalculator",
    "hrv_score",
    "sleep_score_from_duration",
    "stress_score",
]
