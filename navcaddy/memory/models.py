"""Shot history and miss pattern models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..bag.models import Club
from .decay import PATTERN_HALF_LIFE_DAYS, decay, elapsed_days


class Lie(str, Enum):
    TEE = "TEE"
    FAIRWAY = "FAIRWAY"
    ROUGH = "ROUGH"
    BUNKER = "BUNKER"
    GREEN = "GREEN"
    FRINGE = "FRINGE"
    HAZARD = "HAZARD"


class MissDirection(str, Enum):
    PUSH = "PUSH"
    PULL = "PULL"
    SLICE = "SLICE"
    HOOK = "HOOK"
    FAT = "FAT"
    THIN = "THIN"
    STRAIGHT = "STRAIGHT"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class PressureContext(BaseModel):
    is_user_tagged: bool = False
    is_inferred: bool = False
    scoring_context: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_pressure(self) -> bool:
        return self.is_user_tagged or self.is_inferred


class Shot(BaseModel):
    id: str
    club: Club
    lie: Lie
    miss_direction: MissDirection | None = None
    hole_number: int | None = Field(default=None, ge=1, le=18)
    pressure_context: PressureContext = Field(default_factory=PressureContext)
    timestamp: datetime

    model_config = ConfigDict(frozen=True)


class MissPattern(BaseModel):
    """Aggregated miss tendency.

    ``base_confidence`` is the undecayed frequency ratio anchored at
    ``last_occurrence`` and is what gets persisted. ``confidence`` is the value
    as of the last aggregation or read; :meth:`decayed_confidence` always
    starts from the base so a stored pattern is decayed exactly once.
    When no base is given it defaults to ``confidence``.
    """

    id: str
    direction: MissDirection
    club: Club | None = None
    frequency: int = Field(gt=0)
    confidence: float
    base_confidence: float = 0.0
    pressure_context: PressureContext | None = None
    last_occurrence: datetime

    model_config = ConfigDict(frozen=True)

    @field_validator("direction")
    @classmethod
    def _not_straight(cls, value: MissDirection) -> MissDirection:
        if value is MissDirection.STRAIGHT:
            raise ValueError("STRAIGHT is not a miss pattern")
        return value

    @model_validator(mode="before")
    @classmethod
    def _default_base(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("base_confidence") is None:
            data = {**data, "base_confidence": data.get("confidence", 0.0)}
        return data

    @field_validator("confidence", "base_confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return min(1.0, max(0.0, value))

    def decayed_confidence(
        self, now: datetime, half_life_days: float = PATTERN_HALF_LIFE_DAYS
    ) -> float:
        return decay(
            self.base_confidence, elapsed_days(self.last_occurrence, now), half_life_days
        )


__all__ = [
    "Lie",
    "MissDirection",
    "PressureContext",
    "Shot",
    "MissPattern",
]
