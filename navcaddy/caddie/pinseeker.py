"""Personalized hole strategy from miss patterns, readiness and hazards."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Dict, List, Mapping, Sequence

from .. import telemetry
from ..errors import InvalidArgument
from ..memory.models import MissDirection, MissPattern
from ..readiness.models import ReadinessScore
from ..repositories import BagRepository, Clock, PatternRepository, utcnow
from .models import (
    MAX_RISK_CALLOUTS,
    CourseHole,
    HazardType,
    HazardZone,
    HoleStrategy,
    LandingZone,
    PersonalizationContext,
)

logger = logging.getLogger(__name__)

STRAIGHT_LINE_DEG = 180
AIM_BIAS_DEG = 10
LAYUP_PERCENT = 70

_AIM_LEFT = {MissDirection.SLICE, MissDirection.PUSH}
_AIM_RIGHT = {MissDirection.HOOK, MissDirection.PULL}

_HAZARD_RANK = {
    HazardType.WATER: 0,
    HazardType.OB: 0,
    HazardType.BUNKER: 1,
    HazardType.PENALTY_ROUGH: 1,
    HazardType.TREES: 1,
}


def dominant_miss(patterns: Sequence[MissPattern], now: datetime) -> MissDirection:
    """Direction with the highest decayed confidence; STRAIGHT when none.

    Recency can outrank raw frequency because every pattern is decayed to
    ``now`` before comparing.
    """

    if not patterns:
        return MissDirection.STRAIGHT
    best = max(patterns, key=lambda pattern: pattern.decayed_confidence(now))
    return best.direction


def safety_margin(handicap: int, readiness: ReadinessScore) -> int:
    if handicap < 0:
        raise InvalidArgument(f"handicap must be non-negative, got {handicap}")
    return int(handicap * 2 / readiness.adjustment_factor())


def ideal_distance(hole: CourseHole) -> int:
    if hole.par == 3:
        return hole.length_meters
    return hole.length_meters * LAYUP_PERCENT // 100


def target_line(miss: MissDirection) -> int:
    if miss in _AIM_LEFT:
        return STRAIGHT_LINE_DEG - AIM_BIAS_DEG
    if miss in _AIM_RIGHT:
        return STRAIGHT_LINE_DEG + AIM_BIAS_DEG
    return STRAIGHT_LINE_DEG


def _has_side(hazards: Sequence[HazardZone], side: str) -> bool:
    return any(hazard.location.side == side for hazard in hazards)


def visual_cue(miss: MissDirection, hazards: Sequence[HazardZone], par: int) -> str:
    name = miss.label.lower()
    if miss in _AIM_LEFT or miss in _AIM_RIGHT:
        aim, trouble = ("left", "right") if miss in _AIM_LEFT else ("right", "left")
        if par == 3:
            return f"Aim center-{aim} of green to counter your {name}"
        if _has_side(hazards, trouble):
            return (
                f"Aim {aim} side of fairway: your {name} brings "
                f"{trouble} hazards into play"
            )
        return f"Aim {aim} third of fairway to counter {name}"

    if par == 3:
        if _has_side(hazards, "right"):
            return "Aim center-left of green to avoid right-side trouble"
        if _has_side(hazards, "left"):
            return "Aim center-right of green to avoid left-side trouble"
        return "Aim center of green"
    if _has_side(hazards, "center"):
        return "Play safe and avoid the center hazard"
    return "Aim center of fairway"


def _callout(hazard: HazardZone, miss: MissDirection) -> str:
    side = hazard.location.side
    name = miss.label.lower()
    if hazard.type is HazardType.WATER:
        return f"{side.capitalize()} miss brings water into play, {name} tendency increases risk"
    if hazard.type is HazardType.OB:
        return f"OB {side}: {name} pattern puts this in play"
    if hazard.type is HazardType.BUNKER:
        return f"{side.capitalize()} bunker guards the landing zone, watch the {name}"
    if hazard.type is HazardType.PENALTY_ROUGH:
        return f"Penalty rough {side} catches a {name}"
    return f"Trees {side} come into play with your {name}"


def risk_callouts(miss: MissDirection, hazards: Sequence[HazardZone]) -> List[str]:
    ranked = sorted(hazards, key=lambda hazard: _HAZARD_RANK[hazard.type])
    return [_callout(hazard, miss) for hazard in ranked[:MAX_RISK_CALLOUTS]]


def compute_strategy(
    hole: CourseHole,
    handicap: int,
    readiness: ReadinessScore,
    patterns: Sequence[MissPattern],
    club_distances: Mapping[str, int],
    now: datetime,
) -> HoleStrategy:
    """Compute a hole strategy from already-resolved inputs."""

    miss = dominant_miss(patterns, now)
    danger_zones = [hazard for hazard in hole.hazards if miss in hazard.affected_misses]

    landing_zone = LandingZone(
        target_line=target_line(miss),
        ideal_distance=ideal_distance(hole),
        safety_margin=safety_margin(handicap, readiness),
        visual_cue=visual_cue(miss, danger_zones, hole.par),
    )

    return HoleStrategy(
        hole_number=hole.number,
        danger_zones=danger_zones,
        recommended_landing_zone=landing_zone,
        risk_callouts=risk_callouts(miss, danger_zones),
        personalized_for=PersonalizationContext(
            handicap=handicap,
            dominant_miss=miss,
            club_distances=dict(club_distances),
            readiness_score=readiness.overall,
        ),
    )


class PinSeekerEngine:
    """Resolve patterns and bag data, then compute the hole strategy."""

    def __init__(
        self,
        pattern_repository: PatternRepository,
        bag_repository: BagRepository,
        clock: Clock = utcnow,
    ) -> None:
        self._patterns = pattern_repository
        self._bags = bag_repository
        self._clock = clock

    async def _load_patterns(self) -> List[MissPattern]:
        try:
            return await self._patterns.get_miss_patterns()
        except Exception:
            logger.warning("patterns_unavailable", exc_info=True)
            telemetry.record_fallback("patterns")
            return []

    async def _load_club_distances(self) -> Dict[str, int]:
        try:
            bag = await self._bags.get_active_bag()
            if bag is None:
                return {}
            clubs = await self._bags.get_clubs_for_bag(bag.id)
        except Exception:
            logger.warning("bag_unavailable", exc_info=True)
            telemetry.record_fallback("bag")
            return {}
        return {club.name: club.estimated_carry for club in clubs}

    async def compute_strategy(
        self, hole: CourseHole, handicap: int, readiness: ReadinessScore
    ) -> HoleStrategy:
        start = time.perf_counter()
        patterns = await self._load_patterns()
        club_distances = await self._load_club_distances()

        strategy = compute_strategy(
            hole, handicap, readiness, patterns, club_distances, self._clock()
        )

        duration = time.perf_counter() - start
        miss = strategy.personalized_for.dominant_miss.value
        telemetry.record_strategy(dominant_miss=miss, duration_s=duration)
        logger.info(
            "strategy_computed",
            extra=telemetry.build_log_payload(
                "strategy_computed",
                hole=hole.number,
                dominant_miss=miss,
                danger_zones=len(strategy.danger_zones),
            ),
        )
        return strategy


__all__ = [
    "PinSeekerEngine",
    "compute_strategy",
    "dominant_miss",
    "ideal_distance",
    "risk_callouts",
    "safety_margin",
    "target_line",
    "visual_cue",
]
