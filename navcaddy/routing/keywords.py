from __future__ import annotations

import re
from typing import List, Tuple

from .intents import INTENT_REGISTRY, IntentType


def normalize(text: str) -> str:
    return " ".join(text.lower().split())


def _contains(text: str, phrase: str) -> bool:
    return re.search(rf"\b{re.escape(phrase)}\b", text) is not None


def contains_any(text: str, phrases: List[str] | Tuple[str, ...]) -> bool:
    return any(_contains(text, phrase) for phrase in phrases)


def match_keywords(text: str) -> List[Tuple[IntentType, int]]:
    """Intents whose keywords occur in ``text``, most hits first.

    Ties keep registry order.
    """

    normalized = normalize(text)
    scored: List[Tuple[IntentType, int]] = []
    for intent_type, schema in INTENT_REGISTRY.items():
        hits = sum(1 for keyword in schema.keywords if _contains(normalized, keyword))
        if hits:
            scored.append((intent_type, hits))
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored


__all__ = ["normalize", "contains_any", "match_keywords"]
