"""Intent providers: the black-box parsers behind the classifier."""

from __future__ import annotations

import abc
import re
import uuid
from typing import Any, Mapping

from ..memory.models import Lie
from .intents import ExtractedEntities, IntentType, ParsedIntent
from .keywords import match_keywords, normalize
from .normalizer import normalize_input


class IntentProviderError(Exception):
    """Base error raised by intent providers."""


class IntentProviderTimeout(IntentProviderError):
    """Raised when a provider exceeds its timeout budget."""


class IntentProvider(abc.ABC):
    """Interface for utterance-to-intent parsers."""

    name: str = "provider"

    @abc.abstractmethod
    async def parse(
        self, text: str, context: Mapping[str, Any] | None = None
    ) -> ParsedIntent:
        """Parse ``text`` into a single intent with a confidence."""


_YARDAGE_RE = re.compile(r"\b(\d{2,3})\s*(?:yards?|yds?|m|meters?)\b")
_HOLE_RE = re.compile(r"\bhole\s+(\d{1,2})\b")
_CLUB_RE = re.compile(
    r"\b(driver|putter|[3-9][ -]?(?:iron|wood|hybrid)|pitching wedge|"
    r"sand wedge|gap wedge|lob wedge|approach wedge)\b"
)
_LIES = {lie.value.lower(): lie for lie in Lie}


def extract_entities(text: str) -> ExtractedEntities:
    normalized = normalize(normalize_input(text).normalized)
    yardage = _YARDAGE_RE.search(normalized)
    hole = _HOLE_RE.search(normalized)
    club = _CLUB_RE.search(normalized)
    lie = next((value for key, value in _LIES.items() if key in normalized.split()), None)
    return ExtractedEntities(
        club=club.group(1) if club else None,
        yardage=int(yardage.group(1)) if yardage else None,
        hole_number=int(hole.group(1)) if hole else None,
        lie=lie,
    )


class KeywordIntentProvider(IntentProvider):
    """Deterministic offline provider scoring utterances against registry keywords.

    One keyword hit lands in the confirm band; each extra hit adds 0.2.
    """

    name = "keyword"

    NO_MATCH_CONFIDENCE = 0.2
    SINGLE_HIT_CONFIDENCE = 0.6
    EXTRA_HIT_BONUS = 0.2
    MAX_CONFIDENCE = 0.95

    async def parse(
        self, text: str, context: Mapping[str, Any] | None = None
    ) -> ParsedIntent:
        matches = match_keywords(normalize_input(text).normalized)
        if matches:
            intent_type, hits = matches[0]
            confidence = min(
                self.MAX_CONFIDENCE,
                self.SINGLE_HIT_CONFIDENCE + self.EXTRA_HIT_BONUS * (hits - 1),
            )
        else:
            intent_type, confidence = IntentType.HELP_REQUEST, self.NO_MATCH_CONFIDENCE

        return ParsedIntent(
            intent_id=uuid.uuid4().hex,
            intent_type=intent_type,
            confidence=confidence,
            entities=extract_entities(text),
            user_goal=text.strip() or None,
        )


__all__ = [
    "IntentProvider",
    "IntentProviderError",
    "IntentProviderTimeout",
    "KeywordIntentProvider",
    "extract_entities",
]
