"""Rolling-window miss pattern aggregation with time decay."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Sequence

from ..bag.models import Club
from ..config import get_settings
from ..repositories import (
    NOISE_FLOOR_CONFIDENCE,
    Clock,
    PatternRepository,
    ShotRepository,
    utcnow,
)
from .decay import elapsed_days, decay
from .models import MissDirection, MissPattern, PressureContext, Shot

logger = logging.getLogger(__name__)

MIN_SHOTS_FOR_PATTERN = 3
MIN_FREQUENCY_THRESHOLD = 0.3


def _combined_pressure(shots: Sequence[Shot]) -> PressureContext:
    return PressureContext(
        is_user_tagged=any(shot.pressure_context.is_user_tagged for shot in shots),
        is_inferred=any(shot.pressure_context.is_inferred for shot in shots),
    )


def aggregate_shots(
    shots: Sequence[Shot],
    now: datetime,
    *,
    club: Club | None = None,
    pressure_context: PressureContext | None = None,
    id_prefix: str = "pattern",
) -> List[MissPattern]:
    """Turn a bounded shot list into decayed patterns, highest confidence first.

    Directions below ``MIN_FREQUENCY_THRESHOLD`` of all shots are dropped. The
    raw ratio is kept as ``base_confidence`` for persistence.
    """

    total = len(shots)
    if total < MIN_SHOTS_FOR_PATTERN:
        return []

    groups: Dict[MissDirection, List[Shot]] = defaultdict(list)
    for shot in shots:
        if shot.miss_direction is None or shot.miss_direction is MissDirection.STRAIGHT:
            continue
        groups[shot.miss_direction].append(shot)

    patterns: List[MissPattern] = []
    for direction, group in groups.items():
        ratio = len(group) / total
        if ratio < MIN_FREQUENCY_THRESHOLD:
            continue
        last = max(shot.timestamp for shot in group)
        base = min(1.0, max(0.0, ratio))
        suffix = f"-{club.id}" if club is not None else ""
        if pressure_context is not None:
            suffix += "-pressure"
        patterns.append(
            MissPattern(
                id=f"{id_prefix}-{direction.value.lower()}{suffix}",
                direction=direction,
                club=club,
                frequency=len(group),
                confidence=decay(base, elapsed_days(last, now)),
                base_confidence=base,
                pressure_context=pressure_context,
                last_occurrence=last,
            )
        )

    patterns.sort(key=lambda pattern: pattern.confidence, reverse=True)
    return patterns


class MissPatternAggregator:
    def __init__(
        self,
        shot_repository: ShotRepository,
        pattern_repository: PatternRepository,
        clock: Clock = utcnow,
    ) -> None:
        self._shots = shot_repository
        self._patterns = pattern_repository
        self._clock = clock

    def _window(self, shots: Iterable[Shot], days: int, max_shots: int) -> List[Shot]:
        cutoff = self._clock() - timedelta(days=days)
        recent = sorted(
            (shot for shot in shots if shot.timestamp >= cutoff),
            key=lambda shot: shot.timestamp,
            reverse=True,
        )
        return recent[:max_shots]

    async def aggregate_patterns(
        self, days: int | None = None, max_shots: int | None = None
    ) -> List[MissPattern]:
        settings = get_settings()
        days = settings.pattern_window_days if days is None else days
        max_shots = settings.pattern_shot_limit if max_shots is None else max_shots

        shots = self._window(await self._shots.get_recent_shots(days), days, max_shots)
        patterns = aggregate_shots(shots, self._clock())
        logger.debug(
            "pattern_aggregation",
            extra={"shots": len(shots), "patterns": len(patterns)},
        )
        return patterns

    async def get_patterns_for_club(self, club_id: str) -> List[MissPattern]:
        settings = get_settings()
        shots = self._window(
            await self._shots.get_shots_by_club(club_id),
            settings.pattern_window_days,
            settings.pattern_shot_limit,
        )
        if not shots:
            return []
        return aggregate_shots(shots, self._clock(), club=shots[0].club)

    async def get_patterns_with_pressure(self) -> List[MissPattern]:
        settings = get_settings()
        shots = self._window(
            await self._shots.get_shots_with_pressure(),
            settings.pattern_window_days,
            settings.pattern_shot_limit,
        )
        if not shots:
            return []
        return aggregate_shots(
            shots, self._clock(), pressure_context=_combined_pressure(shots)
        )

    async def get_patterns_for_club_under_pressure(
        self, club_id: str
    ) -> List[MissPattern]:
        settings = get_settings()
        pressure_shots = await self._shots.get_shots_with_pressure()
        shots = self._window(
            (shot for shot in pressure_shots if shot.club.id == club_id),
            settings.pattern_window_days,
            settings.pattern_shot_limit,
        )
        if not shots:
            return []
        return aggregate_shots(
            shots,
            self._clock(),
            club=shots[0].club,
            pressure_context=_combined_pressure(shots),
        )

    async def get_stored_patterns(self) -> List[MissPattern]:
        """Stored patterns re-decayed to now, noise dropped, strongest first."""

        now = self._clock()
        decayed: List[MissPattern] = []
        for pattern in await self._patterns.get_miss_patterns():
            confidence = pattern.decayed_confidence(now)
            if confidence < NOISE_FLOOR_CONFIDENCE:
                continue
            decayed.append(pattern.model_copy(update={"confidence": confidence}))
        decayed.sort(key=lambda pattern: pattern.confidence, reverse=True)
        return decayed

    async def save_patterns(self, patterns: Iterable[MissPattern]) -> None:
        for pattern in patterns:
            await self._patterns.update_pattern(pattern)

    async def clean_stale_patterns(self) -> int:
        return await self._patterns.delete_stale_patterns()


__all__ = [
    "MIN_SHOTS_FOR_PATTERN",
    "MIN_FREQUENCY_THRESHOLD",
    "MissPatternAggregator",
    "aggregate_shots",
]
