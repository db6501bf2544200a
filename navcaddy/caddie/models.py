"""Hole geometry and strategy models."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..memory.models import MissDirection

HazardSide = Literal["right", "left", "center", "long", "short"]

MAX_RISK_CALLOUTS = 3


class HazardType(str, Enum):
    WATER = "WATER"
    OB = "OB"
    BUNKER = "BUNKER"
    PENALTY_ROUGH = "PENALTY_ROUGH"
    TREES = "TREES"

    @property
    def label(self) -> str:
        return {
            HazardType.WATER: "water",
            HazardType.OB: "OB",
            HazardType.BUNKER: "bunker",
            HazardType.PENALTY_ROUGH: "penalty rough",
            HazardType.TREES: "trees",
        }[self]


class HazardLocation(BaseModel):
    side: HazardSide
    distance_range: Tuple[int, int]

    model_config = ConfigDict(frozen=True)

    @field_validator("distance_range")
    @classmethod
    def _valid_range(cls, value: Tuple[int, int]) -> Tuple[int, int]:
        start, end = value
        if start < 0:
            raise ValueError("distance range must start at 0 or greater")
        if end < start:
            raise ValueError("distance range cannot be empty")
        return value


class HazardZone(BaseModel):
    type: HazardType
    location: HazardLocation
    penalty_strokes: float = Field(default=1.0, ge=0)
    affected_misses: List[MissDirection] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class PinPosition(BaseModel):
    front: bool = False
    middle: bool = False
    back: bool = False
    left: bool = False
    center: bool = False
    right: bool = False

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _flags_set(self) -> "PinPosition":
        if not (self.front or self.middle or self.back):
            raise ValueError("at least one depth flag (front/middle/back) must be set")
        if not (self.left or self.center or self.right):
            raise ValueError("at least one width flag (left/center/right) must be set")
        return self

    def describe(self) -> str:
        depth = "Front" if self.front else "Middle" if self.middle else "Back"
        width = "left" if self.left else "center" if self.center else "right"
        return f"{depth} {width}"


class CourseHole(BaseModel):
    number: int = Field(ge=1, le=18)
    par: Literal[3, 4, 5]
    length_meters: int = Field(gt=0)
    hazards: List[HazardZone] = Field(default_factory=list)
    pin_position: PinPosition | None = None

    model_config = ConfigDict(frozen=True)


class LandingZone(BaseModel):
    target_line: int = Field(ge=0, le=359)
    ideal_distance: int = Field(ge=0)
    safety_margin: int = Field(ge=0)
    visual_cue: str

    model_config = ConfigDict(frozen=True)


class PersonalizationContext(BaseModel):
    handicap: int = Field(ge=0)
    dominant_miss: MissDirection
    club_distances: Dict[str, int] = Field(default_factory=dict)
    readiness_score: int = Field(ge=0, le=100)

    model_config = ConfigDict(frozen=True)


class HoleStrategy(BaseModel):
    hole_number: int = Field(ge=1, le=18)
    danger_zones: List[HazardZone]
    recommended_landing_zone: LandingZone
    risk_callouts: List[str] = Field(max_length=MAX_RISK_CALLOUTS)
    personalized_for: PersonalizationContext

    model_config = ConfigDict(frozen=True)


__all__ = [
    "MAX_RISK_CALLOUTS",
    "HazardType",
    "HazardLocation",
    "HazardZone",
    "PinPosition",
    "CourseHole",
    "LandingZone",
    "PersonalizationContext",
    "HoleStrategy",
]
