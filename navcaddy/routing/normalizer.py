"""Utterance clean-up ahead of intent classification.

The pipeline masks profanity, collapses spoken compound numbers, expands golf
slang and club abbreviations, converts single number words to digits and
tidies whitespace. Matching is whole-word and case-insensitive.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Pattern, Tuple

PROFANITY: Tuple[str, ...] = (
    "fuck",
    "shit",
    "damn",
    "hell",
    "ass",
    "bitch",
    "crap",
    "piss",
    "bastard",
    "cock",
    "dick",
)

CLUB_ABBREVIATIONS: Mapping[str, str] = MappingProxyType(
    {
        "3i": "3-iron",
        "4i": "4-iron",
        "5i": "5-iron",
        "6i": "6-iron",
        "7i": "7-iron",
        "8i": "8-iron",
        "9i": "9-iron",
        "pw": "pitching wedge",
        "gw": "gap wedge",
        "aw": "approach wedge",
        "sw": "sand wedge",
        "lw": "lob wedge",
        "3w": "3-wood",
        "5w": "5-wood",
        "7w": "7-wood",
        "2h": "2-hybrid",
        "3h": "3-hybrid",
        "4h": "4-hybrid",
        "5h": "5-hybrid",
    }
)

# "bunker" stays as-is because it is also a lie.
COMMON_TERMS: Mapping[str, str] = MappingProxyType(
    {
        "stick": "club",
        "sticks": "clubs",
        "dance floor": "green",
        "the dance floor": "green",
        "tin cup": "hole",
        "putting surface": "green",
        "fairway metal": "fairway wood",
        "big stick": "driver",
        "big dog": "driver",
        "flat stick": "putter",
    }
)

NUMBER_WORDS: Mapping[str, str] = MappingProxyType(
    {
        "one": "1",
        "two": "2",
        "three": "3",
        "four": "4",
        "five": "5",
        "six": "6",
        "seven": "7",
        "eight": "8",
        "nine": "9",
        "ten": "10",
        "eleven": "11",
        "twelve": "12",
        "thirteen": "13",
        "fourteen": "14",
        "fifteen": "15",
        "sixteen": "16",
        "seventeen": "17",
        "eighteen": "18",
        "nineteen": "19",
        "twenty": "20",
        "thirty": "30",
        "forty": "40",
        "fifty": "50",
        "sixty": "60",
        "seventy": "70",
        "eighty": "80",
        "ninety": "90",
        "hundred": "100",
    }
)

_TENS = {"twenty": 20, "thirty": 30}
_YARDAGE_TENS = {
    "ten": 10,
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fifty": 50,
    "sixty": 60,
    "seventy": 70,
    "eighty": 80,
    "ninety": 90,
}
_DIGITS = ("one", "two", "three", "four", "five", "six", "seven", "eight", "nine")


def _compound_numbers() -> Mapping[str, str]:
    table = {"two hundred": "200"}
    for word, value in _YARDAGE_TENS.items():
        if value >= 50:
            table[f"one hundred {word}"] = str(100 + value)
        table[f"one {word}"] = str(100 + value)
    for word, tens in _TENS.items():
        for index, digit in enumerate(_DIGITS, start=1):
            table[f"{word} {digit}"] = str(tens + index)
    for index, digit in enumerate(_DIGITS, start=1):
        if index >= 3:
            table[f"{digit} iron"] = f"{index}-iron"
        if index in (3, 5, 7):
            table[f"{digit} wood"] = f"{index}-wood"
    return MappingProxyType(table)


COMPOUND_NUMBERS: Mapping[str, str] = _compound_numbers()


class ModificationType(str, Enum):
    PROFANITY = "PROFANITY"
    NUMBER = "NUMBER"
    SLANG = "SLANG"


@dataclass(frozen=True)
class Modification:
    kind: ModificationType
    original: str
    replacement: str


@dataclass(frozen=True)
class NormalizationResult:
    normalized: str
    original: str
    modifications: Tuple[Modification, ...] = field(default_factory=tuple)

    @property
    def was_modified(self) -> bool:
        return self.normalized != self.original


def _compile(table: Mapping[str, str]) -> List[Tuple[Pattern[str], str]]:
    # Longest phrases first so "one hundred fifty" wins over "one fifty".
    ordered = sorted(table.items(), key=lambda item: len(item[0]), reverse=True)
    return [
        (re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE), replacement)
        for phrase, replacement in ordered
    ]


_PROFANITY = _compile({word: "*" * len(word) for word in PROFANITY})
_COMPOUND = _compile(COMPOUND_NUMBERS)
_SLANG = _compile({**CLUB_ABBREVIATIONS, **COMMON_TERMS})
_NUMBERS = _compile(NUMBER_WORDS)


def _apply(
    text: str,
    rules: List[Tuple[Pattern[str], str]],
    kind: ModificationType,
    modifications: List[Modification],
) -> str:
    for pattern, replacement in rules:
        for match in pattern.finditer(text):
            modifications.append(Modification(kind, match.group(0), replacement))
        text = pattern.sub(replacement, text)
    return text


def normalize_input(text: str) -> NormalizationResult:
    if not text or not text.strip():
        return NormalizationResult(normalized=text, original=text)

    modifications: List[Modification] = []
    normalized = _apply(text, _PROFANITY, ModificationType.PROFANITY, modifications)
    normalized = _apply(normalized, _COMPOUND, ModificationType.NUMBER, modifications)
    normalized = _apply(normalized, _SLANG, ModificationType.SLANG, modifications)
    normalized = _apply(normalized, _NUMBERS, ModificationType.NUMBER, modifications)
    normalized = " ".join(normalized.split())
    return NormalizationResult(
        normalized=normalized, original=text, modifications=tuple(modifications)
    )


__all__ = [
    "CLUB_ABBREVIATIONS",
    "COMMON_TERMS",
    "COMPOUND_NUMBERS",
    "NUMBER_WORDS",
    "Modification",
    "ModificationType",
    "NormalizationResult",
    "normalize_input",
]
