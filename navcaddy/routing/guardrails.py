"""Persona guardrails for user-facing caddy responses."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Pattern, Tuple


class DisclaimerType(str, Enum):
    MEDICAL = "MEDICAL"
    SWING_TECHNIQUE = "SWING_TECHNIQUE"
    BETTING = "BETTING"
    SAFETY = "SAFETY"


@dataclass(frozen=True)
class GuardrailResult:
    disclaimer: DisclaimerType | None = None
    violated_rule: str | None = None

    @property
    def needs_disclaimer(self) -> bool:
        return self.disclaimer is not None


def _patterns(*sources: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(source, re.IGNORECASE) for source in sources)


# Checked in order; the first matching rule decides the disclaimer.
_RULES: Tuple[Tuple[DisclaimerType, str, Tuple[Pattern[str], ...]], ...] = (
    (
        DisclaimerType.MEDICAL,
        "Response discusses medical or physical health topics",
        _patterns(
            r"\b(pain|injury|hurt|strain|sprain|tear|inflammation)\b",
            r"\b(doctor|physician|physical therapy|medical)\b",
            r"\b(diagnose|diagnosis|treatment|heal|recovery time)\b",
            r"\b(tendonitis|arthritis|nerve|muscle damage)\b",
        ),
    ),
    (
        DisclaimerType.BETTING,
        "Response discusses betting or gambling",
        _patterns(
            r"\b(bet|wager|gamble|odds|spread)\b",
            r"\b(gambling|betting line|over under)\b",
            r"\bmoney on\b",
        ),
    ),
    (
        DisclaimerType.SWING_TECHNIQUE,
        "Response provides swing technique advice",
        _patterns(
            r"\b(swing path|swing plane|club face|impact position)\b",
            r"\b(grip pressure|grip change|stance width|ball position)\b",
            r"\b(weight shift|hip rotation|shoulder turn|backswing)\b",
            r"\b(wrist hinge|release point|follow through)\b",
            r"\bfix your (slice|hook|push|pull)\b",
        ),
    ),
    (
        DisclaimerType.SAFETY,
        "Response contains absolute guarantees",
        _patterns(
            r"\bwill (fix|cure|eliminate|stop|prevent)\b",
            r"\b(guaranteed|definitely|certainly) (fix|improve|solve)\b",
            r"\bthis will\b",
            r"\byou['’]ll never\b",
        ),
    ),
)

DISCLAIMERS: Mapping[DisclaimerType, str] = MappingProxyType(
    {
        DisclaimerType.MEDICAL: (
            "*Note: This is general information only. For pain, injury concerns, "
            "or persistent physical issues, please consult with a qualified "
            "medical professional or physical therapist.*"
        ),
        DisclaimerType.SWING_TECHNIQUE: (
            "*Note: This is general guidance. For personalized swing instruction, "
            "consider working with a certified golf professional.*"
        ),
        DisclaimerType.BETTING: (
            "*Note: I don't provide betting or gambling advice. Please bet "
            "responsibly and within your means.*"
        ),
        DisclaimerType.SAFETY: (
            "*Note: Results may vary. These are suggestions based on patterns, "
            "not guaranteed outcomes.*"
        ),
    }
)

FORBIDDEN_PHRASES: Tuple[str, ...] = (
    "as an AI",
    "as a language model",
    "I cannot diagnose",
    "I am not a doctor",
    "bet on",
    "place a wager",
)


def check_response(text: str) -> GuardrailResult:
    for disclaimer, rule, patterns in _RULES:
        if any(pattern.search(text) for pattern in patterns):
            return GuardrailResult(disclaimer=disclaimer, violated_rule=rule)
    return GuardrailResult()


def forbidden_phrases(text: str) -> List[str]:
    lowered = text.lower()
    return [phrase for phrase in FORBIDDEN_PHRASES if phrase.lower() in lowered]


def apply_guardrails(text: str) -> Tuple[str, GuardrailResult]:
    """Return ``text`` with the matching disclaimer appended, plus the check result."""

    result = check_response(text)
    if result.disclaimer is None:
        return text.strip(), result
    return f"{text.strip()}\n\n{DISCLAIMERS[result.disclaimer]}", result


__all__ = [
    "DISCLAIMERS",
    "FORBIDDEN_PHRASES",
    "DisclaimerType",
    "GuardrailResult",
    "apply_guardrails",
    "check_response",
    "forbidden_phrases",
]
