from __future__ import annotations

import logging
from dataclasses import dataclass

from .. import telemetry
from ..conditions.calculator import ConditionsCalculator
from ..conditions.models import ConditionsAdjustment, Location, WeatherData
from ..config import get_settings
from ..readiness.models import ReadinessScore
from ..repositories import Clock, ReadinessRepository, WeatherSource, utcnow
from .models import CourseHole, HoleStrategy
from .pinseeker import PinSeekerEngine

logger = logging.getLogger(__name__)


@dataclass
class LiveCaddyContext:
    weather: WeatherData | None
    readiness: ReadinessScore
    strategy: HoleStrategy | None = None
    carry_adjustment: ConditionsAdjustment | None = None


class LiveCaddyContextService:
    """Gather boundary data for the live caddy view with defined fallbacks."""

    def __init__(
        self,
        weather_source: WeatherSource,
        readiness_repository: ReadinessRepository,
        engine: PinSeekerEngine,
        conditions: ConditionsCalculator | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self._weather = weather_source
        self._readiness = readiness_repository
        self._engine = engine
        self._conditions = conditions or ConditionsCalculator()
        self._clock = clock

    async def get_weather(self, location: Location) -> WeatherData | None:
        try:
            result = await self._weather.get_current_weather(location)
        except Exception:
            logger.warning("weather_unavailable", exc_info=True)
            telemetry.record_fallback("weather")
            return None
        if not result.ok:
            logger.warning("weather_unavailable", extra={"error": result.error})
            telemetry.record_fallback("weather")
            return None
        return result.data

    async def get_readiness(self) -> ReadinessScore:
        try:
            score = await self._readiness.get_most_recent()
        except Exception:
            logger.warning("readiness_unavailable", exc_info=True)
            score = None
        if score is None:
            logger.info("readiness_default")
            telemetry.record_fallback("readiness")
            return ReadinessScore.default(
                now=self._clock(), overall=get_settings().default_readiness
            )
        return score

    async def get_hole_strategy(self, hole: CourseHole, handicap: int) -> HoleStrategy:
        readiness = await self.get_readiness()
        return await self._engine.compute_strategy(hole, handicap, readiness)

    async def get_context(
        self,
        location: Location,
        hole: CourseHole | None = None,
        handicap: int | None = None,
        target_bearing: int | None = None,
        base_carry: int | None = None,
    ) -> LiveCaddyContext:
        weather = await self.get_weather(location)
        readiness = await self.get_readiness()

        strategy = None
        if hole is not None and handicap is not None:
            strategy = await self._engine.compute_strategy(hole, handicap, readiness)

        adjustment = None
        if weather is not None and target_bearing is not None and base_carry is not None:
            adjustment = self._conditions.calculate_adjustment(
                weather, target_bearing, base_carry
            )

        return LiveCaddyContext(
            weather=weather,
            readiness=readiness,
            strategy=strategy,
            carry_adjustment=adjustment,
        )


__all__ = ["LiveCaddyContext", "LiveCaddyContextService"]
