from __future__ import annotations

from typing import List, Tuple

from .classification import MAX_SUGGESTIONS, Clarify
from .intents import IntentType, ParsedIntent
from .keywords import contains_any, match_keywords, normalize

MIN_SUGGESTION_CONFIDENCE = 0.30

DEFAULT_SUGGESTIONS: Tuple[IntentType, ...] = (
    IntentType.SHOT_RECOMMENDATION,
    IntentType.HELP_REQUEST,
    IntentType.CLUB_ADJUSTMENT,
)

_CONTEXT_GROUPS: Tuple[Tuple[Tuple[str, ...], Tuple[IntentType, ...]], ...] = (
    (
        ("feel", "pain", "sore", "tired", "ready"),
        (IntentType.RECOVERY_CHECK, IntentType.PATTERN_QUERY, IntentType.STATS_LOOKUP),
    ),
    (
        ("off", "wrong", "bad", "problem", "issue", "fix"),
        (IntentType.CLUB_ADJUSTMENT, IntentType.PATTERN_QUERY, IntentType.DRILL_REQUEST),
    ),
    (
        ("what", "should", "help", "advice", "recommend"),
        (IntentType.SHOT_RECOMMENDATION, IntentType.HELP_REQUEST, IntentType.DRILL_REQUEST),
    ),
    (
        ("club", "bag", "equipment", "distance", "yardage"),
        (IntentType.CLUB_ADJUSTMENT, IntentType.EQUIPMENT_INFO, IntentType.STATS_LOOKUP),
    ),
    (
        ("score", "round", "play", "game", "hole"),
        (IntentType.SCORE_ENTRY, IntentType.ROUND_START, IntentType.STATS_LOOKUP),
    ),
)


def _context_suggestions(text: str) -> Tuple[IntentType, ...]:
    for words, intents in _CONTEXT_GROUPS:
        if contains_any(text, words):
            return intents
    return DEFAULT_SUGGESTIONS


def _message(text: str) -> str:
    if len(text.split()) <= 3:
        return "I'm not quite sure what you need. Did you mean:"
    if contains_any(text, ("feel", "feels")):
        return "I'm not quite sure what you're referring to. Are you looking to:"
    if contains_any(text, ("off", "wrong", "problem")):
        return "Could you clarify what's off? Are you looking to:"
    if contains_any(text, ("help", "what", "how")):
        return "I can help with that. What would you like to do:"
    return "I'm not quite sure what you're asking. Did you want to:"


class ClarificationHandler:
    """Build up to three suggestions for low-confidence input."""

    def suggestions(self, text: str, parsed: ParsedIntent | None = None) -> List[IntentType]:
        normalized = normalize(text)
        candidates: List[IntentType] = []
        if parsed is not None and parsed.confidence >= MIN_SUGGESTION_CONFIDENCE:
            candidates.append(parsed.intent_type)
        candidates.extend(intent for intent, _hits in match_keywords(normalized))
        candidates.extend(_context_suggestions(normalized))
        candidates.extend(DEFAULT_SUGGESTIONS)

        unique: List[IntentType] = []
        for intent in candidates:
            if intent not in unique:
                unique.append(intent)
        return unique[:MAX_SUGGESTIONS]

    def clarify(self, text: str, parsed: ParsedIntent | None = None) -> Clarify:
        return Clarify(
            suggestions=self.suggestions(text, parsed),
            message=_message(normalize(text)),
            original_input=text,
        )


__all__ = ["ClarificationHandler", "DEFAULT_SUGGESTIONS", "MIN_SUGGESTION_CONFIDENCE"]
