from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from ..repositories import Clock, PatternRepository, ShotRepository, utcnow
from .aggregator import MissPatternAggregator
from .models import MissPattern, Shot

logger = logging.getLogger(__name__)


@dataclass
class RetentionReport:
    shots_deleted: int
    patterns_deleted: int


class MissPatternStore:
    """Record shots and keep aggregated miss patterns current."""

    def __init__(
        self,
        shot_repository: ShotRepository,
        pattern_repository: PatternRepository,
        clock: Clock = utcnow,
    ) -> None:
        self._shots = shot_repository
        self._clock = clock
        self.aggregator = MissPatternAggregator(
            shot_repository, pattern_repository, clock=clock
        )

    async def record_miss(self, shot: Shot) -> None:
        await self._shots.record_shot(shot)

    async def refresh(self) -> List[MissPattern]:
        patterns = await self.aggregator.aggregate_patterns()
        await self.aggregator.save_patterns(patterns)
        return patterns

    async def get_patterns(self) -> List[MissPattern]:
        return await self.aggregator.get_stored_patterns()

    async def get_dominant_pattern(self) -> MissPattern | None:
        patterns = await self.aggregator.get_stored_patterns()
        return patterns[0] if patterns else None

    async def enforce_retention(self) -> RetentionReport:
        report = RetentionReport(
            shots_deleted=await self._shots.enforce_retention_policy(),
            patterns_deleted=await self.aggregator.clean_stale_patterns(),
        )
        logger.info(
            "retention_sweep",
            extra={
                "shots_deleted": report.shots_deleted,
                "patterns_deleted": report.patterns_deleted,
            },
        )
        return report


__all__ = ["MissPatternStore", "RetentionReport"]
