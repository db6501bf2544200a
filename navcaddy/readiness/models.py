from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_READINESS_SCORE = 70
LOW_READINESS_THRESHOLD = 60


class ReadinessSource(str, Enum):
    WEARABLE_SYNC = "WEARABLE_SYNC"
    MANUAL_ENTRY = "MANUAL_ENTRY"


class MetricScore(BaseModel):
    value: float = Field(ge=0, le=100)
    weight: float = Field(ge=0, le=1)

    model_config = ConfigDict(frozen=True)


class ReadinessBreakdown(BaseModel):
    hrv: MetricScore | None = None
    sleep_quality: MetricScore | None = None
    stress_level: MetricScore | None = None

    model_config = ConfigDict(frozen=True)


class ReadinessScore(BaseModel):
    overall: int = Field(ge=0, le=100)
    breakdown: ReadinessBreakdown = Field(default_factory=ReadinessBreakdown)
    timestamp: datetime
    source: ReadinessSource

    model_config = ConfigDict(frozen=True)

    def adjustment_factor(self) -> float:
        """Risk-tolerance multiplier in ``[0.5, 1.0]``; lower means more conservative."""
        if self.overall >= 60:
            return 1.0
        if self.overall <= 40:
            return 0.5
        return 0.5 + ((self.overall - 40) / 20.0) * 0.5

    def is_low(self, threshold: int = LOW_READINESS_THRESHOLD) -> bool:
        return self.overall < threshold

    @classmethod
    def default(
        cls, now: datetime | None = None, overall: int = DEFAULT_READINESS_SCORE
    ) -> "ReadinessScore":
        return cls(
            overall=overall,
            timestamp=now or datetime.now(timezone.utc),
            source=ReadinessSource.MANUAL_ENTRY,
        )


class WearableMetrics(BaseModel):
    hrv_ms: float | None = Field(default=None, ge=0)
    sleep_minutes: int | None = Field(default=None, ge=0)
    sleep_quality_score: float | None = Field(default=None, ge=0, le=100)
    stress_score: float | None = Field(default=None, ge=0, le=100)
    timestamp: datetime

    model_config = ConfigDict(frozen=True)


__all__ = [
    "DEFAULT_READINESS_SCORE",
    "ReadinessSource",
    "MetricScore",
    "ReadinessBreakdown",
    "ReadinessScore",
    "WearableMetrics",
]
