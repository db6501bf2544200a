from __future__ import annotations

import abc
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .. import telemetry
from ..repositories import BagRepository, ReadinessRepository
from .intents import IntentType

logger = logging.getLogger(__name__)


class Prerequisite(str, Enum):
    RECOVERY_DATA = "RECOVERY_DATA"
    ROUND_ACTIVE = "ROUND_ACTIVE"
    BAG_CONFIGURED = "BAG_CONFIGURED"
    COURSE_SELECTED = "COURSE_SELECTED"


# Highest priority first; picks the message when several are unmet.
PREREQUISITE_PRIORITY: Tuple[Prerequisite, ...] = (
    Prerequisite.RECOVERY_DATA,
    Prerequisite.ROUND_ACTIVE,
    Prerequisite.BAG_CONFIGURED,
    Prerequisite.COURSE_SELECTED,
)

INTENT_PREREQUISITES: Mapping[IntentType, Tuple[Prerequisite, ...]] = MappingProxyType(
    {
        IntentType.RECOVERY_CHECK: (Prerequisite.RECOVERY_DATA,),
        IntentType.SCORE_ENTRY: (Prerequisite.ROUND_ACTIVE,),
        IntentType.ROUND_END: (Prerequisite.ROUND_ACTIVE,),
        IntentType.CLUB_ADJUSTMENT: (Prerequisite.BAG_CONFIGURED,),
        IntentType.SHOT_RECOMMENDATION: (Prerequisite.BAG_CONFIGURED,),
        IntentType.COURSE_INFO: (Prerequisite.COURSE_SELECTED,),
    }
)


def prerequisites_for(intent_type: IntentType) -> List[Prerequisite]:
    return list(INTENT_PREREQUISITES.get(intent_type, ()))


def first_by_priority(missing: Sequence[Prerequisite]) -> Prerequisite:
    return min(missing, key=PREREQUISITE_PRIORITY.index)


class PrerequisiteChecker(abc.ABC):
    @abc.abstractmethod
    async def check(self, prerequisite: Prerequisite) -> bool:
        """Return True when ``prerequisite`` is satisfied."""

    async def check_all(self, prerequisites: Sequence[Prerequisite]) -> List[Prerequisite]:
        """Return the unmet subset, in input order."""
        results = await asyncio.gather(*(self.check(p) for p in prerequisites))
        return [p for p, ok in zip(prerequisites, results) if not ok]


@dataclass
class SessionState:
    round_active: bool = False
    course_id: str | None = None

    def as_context(self) -> Dict[str, Any]:
        """Session facts in the shape ``IntentClassifier.classify`` accepts."""
        return {"round_active": self.round_active, "course_id": self.course_id}


class SessionPrerequisiteChecker(PrerequisiteChecker):
    """Checks prerequisites against the repositories and the live session."""

    def __init__(
        self,
        readiness_repository: ReadinessRepository,
        bag_repository: BagRepository,
        session: SessionState | None = None,
    ) -> None:
        self._readiness = readiness_repository
        self._bags = bag_repository
        self.session = session or SessionState()

    async def _bag_configured(self) -> bool:
        bag = await self._bags.get_active_bag()
        if bag is None:
            return False
        return bool(await self._bags.get_clubs_for_bag(bag.id))

    async def check(self, prerequisite: Prerequisite) -> bool:
        """Unmet when the backing lookup fails."""
        try:
            return await self._check(prerequisite)
        except Exception:
            logger.warning(
                "prerequisite_unavailable",
                extra={"prerequisite": prerequisite.value},
                exc_info=True,
            )
            telemetry.record_fallback("prerequisite")
            return False

    async def _check(self, prerequisite: Prerequisite) -> bool:
        if prerequisite is Prerequisite.RECOVERY_DATA:
            return await self._readiness.get_most_recent() is not None
        if prerequisite is Prerequisite.ROUND_ACTIVE:
            return self.session.round_active
        if prerequisite is Prerequisite.BAG_CONFIGURED:
            return await self._bag_configured()
        if prerequisite is Prerequisite.COURSE_SELECTED:
            return self.session.course_id is not None
        raise ValueError(f"Unknown prerequisite: {prerequisite}")


__all__ = [
    "Prerequisite",
    "PREREQUISITE_PRIORITY",
    "INTENT_PREREQUISITES",
    "prerequisites_for",
    "first_by_priority",
    "PrerequisiteChecker",
    "SessionState",
    "SessionPrerequisiteChecker",
]
