from .calculator import ReadinessCalculator
from .models import (
    DEFAULT_READINESS_SCORE,
    MetricScore,
    ReadinessBreakdown,
    ReadinessScore,
    ReadinessSource,
    WearableMetrics,
)

__all__ = [
    "DEFAULT_READINESS_SCORE",
    "MetricScore",
    "ReadinessBreakdown",
    "ReadinessCalculator",
    "ReadinessScore",
    "ReadinessSource",
    "WearableMetrics",
]
