"""Async collaborator contracts and in-memory implementations."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from .bag.models import BagProfile, Club
from .conditions.models import Location, WeatherData
from .config import get_settings
from .memory.decay import within_retention
from .memory.models import MissPattern, Shot
from .memory.retention import purge_expired
from .readiness.models import ReadinessScore

Clock = Callable[[], datetime]

NOISE_FLOOR_CONFIDENCE = 0.01


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class WeatherResult:
    """Outcome of a weather lookup; exactly one of ``data``/``error`` is set."""

    data: Optional[WeatherData] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None

    @classmethod
    def success(cls, data: WeatherData) -> "WeatherResult":
        return cls(data=data)

    @classmethod
    def failure(cls, error: str) -> "WeatherResult":
        return cls(error=error)


class ShotRepository(abc.ABC):
    @abc.abstractmethod
    async def record_shot(self, shot: Shot) -> None: ...

    @abc.abstractmethod
    async def get_recent_shots(self, days: int) -> List[Shot]:
        """Shots newer than ``days``, most recent first."""

    @abc.abstractmethod
    async def get_shots_by_club(self, club_id: str) -> List[Shot]: ...

    @abc.abstractmethod
    async def get_shots_with_pressure(self) -> List[Shot]: ...

    @abc.abstractmethod
    async def enforce_retention_policy(self) -> int:
        """Delete shots outside the retention window; return how many."""


class PatternRepository(abc.ABC):
    @abc.abstractmethod
    async def get_miss_patterns(self) -> List[MissPattern]: ...

    @abc.abstractmethod
    async def update_pattern(self, pattern: MissPattern) -> None: ...

    @abc.abstractmethod
    async def delete_stale_patterns(self) -> int: ...


class ReadinessRepository(abc.ABC):
    @abc.abstractmethod
    async def get_most_recent(self) -> ReadinessScore | None: ...

    @abc.abstractmethod
    async def save_readiness(self, score: ReadinessScore) -> None: ...


class WeatherSource(abc.ABC):
    @abc.abstractmethod
    async def get_current_weather(self, location: Location) -> WeatherResult: ...


class BagRepository(abc.ABC):
    @abc.abstractmethod
    async def get_active_bag(self) -> BagProfile | None: ...

    @abc.abstractmethod
    async def get_clubs_for_bag(self, bag_id: str) -> List[Club]: ...


def _newest_first(shots: List[Shot]) -> List[Shot]:
    return sorted(shots, key=lambda shot: shot.timestamp, reverse=True)


class InMemoryShotRepository(ShotRepository):
    def __init__(
        self, clock: Clock = utcnow, retention_days: int | None = None
    ) -> None:
        self._clock = clock
        self._retention_days = retention_days
        self._shots: Dict[str, Shot] = {}

    @property
    def retention_days(self) -> int:
        if self._retention_days is not None:
            return self._retention_days
        return get_settings().retention_days

    async def record_shot(self, shot: Shot) -> None:
        self._shots[shot.id] = shot

    async def get_recent_shots(self, days: int) -> List[Shot]:
        cutoff = self._clock() - timedelta(days=days)
        return _newest_first([s for s in self._shots.values() if s.timestamp >= cutoff])

    async def get_shots_by_club(self, club_id: str) -> List[Shot]:
        return _newest_first([s for s in self._shots.values() if s.club.id == club_id])

    async def get_shots_with_pressure(self) -> List[Shot]:
        return _newest_first(
            [s for s in self._shots.values() if s.pressure_context.has_pressure]
        )

    async def enforce_retention_policy(self) -> int:
        kept, expired = purge_expired(
            self._shots.values(),
            self._clock(),
            self.retention_days,
            key=lambda shot: shot.timestamp,
        )
        self._shots = {shot.id: shot for shot in kept}
        return len(expired)


class InMemoryPatternRepository(PatternRepository):
    def __init__(
        self, clock: Clock = utcnow, retention_days: int | None = None
    ) -> None:
        self._clock = clock
        self._retention_days = retention_days
        self._patterns: Dict[str, MissPattern] = {}

    async def get_miss_patterns(self) -> List[MissPattern]:
        return list(self._patterns.values())

    async def update_pattern(self, pattern: MissPattern) -> None:
        self._patterns[pattern.id] = pattern

    async def delete_stale_patterns(self) -> int:
        now = self._clock()
        retention_days = self._retention_days or get_settings().retention_days
        stale = [
            pattern_id
            for pattern_id, pattern in self._patterns.items()
            if pattern.decayed_confidence(now) < NOISE_FLOOR_CONFIDENCE
            or not within_retention(pattern.last_occurrence, now, retention_days)
        ]
        for pattern_id in stale:
            del self._patterns[pattern_id]
        return len(stale)


class InMemoryReadinessRepository(ReadinessRepository):
    def __init__(self) -> None:
        self._scores: List[ReadinessScore] = []

    async def get_most_recent(self) -> ReadinessScore | None:
        if not self._scores:
            return None
        return max(self._scores, key=lambda score: score.timestamp)

    async def save_readiness(self, score: ReadinessScore) -> None:
        self._scores.append(score)


class InMemoryBagRepository(BagRepository):
    def __init__(self) -> None:
        self._bags: Dict[str, BagProfile] = {}
        self._clubs: Dict[str, List[Club]] = {}

    def add_bag(self, profile: BagProfile, clubs: List[Club]) -> None:
        self._bags[profile.id] = profile
        self._clubs[profile.id] = list(clubs)

    async def get_active_bag(self) -> BagProfile | None:
        for profile in self._bags.values():
            if profile.is_active:
                return profile
        return None

    async def get_clubs_for_bag(self, bag_id: str) -> List[Club]:
        return list(self._clubs.get(bag_id, []))


class StaticWeatherSource(WeatherSource):
    """Weather source returning a fixed snapshot, or a failure when empty."""

    def __init__(self, weather: WeatherData | None = None) -> None:
        self._weather = weather

    async def get_current_weather(self, location: Location) -> WeatherResult:
        if self._weather is None:
            return WeatherResult.failure("weather unavailable")
        return WeatherResult.success(self._weather)


__all__ = [
    "Clock",
    "NOISE_FLOOR_CONFIDENCE",
    "utcnow",
    "WeatherResult",
    "ShotRepository",
    "PatternRepository",
    "ReadinessRepository",
    "WeatherSource",
    "BagRepository",
    "InMemoryShotRepository",
    "InMemoryPatternRepository",
    "InMemoryReadinessRepository",
    "InMemoryBagRepository",
    "StaticWeatherSource",
]
