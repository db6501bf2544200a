from __future__ import annotations

import asyncio

from navcaddy.memory.models import Lie
from navcaddy.routing.intents import IntentType
from navcaddy.routing.normalizer import ModificationType, normalize_input
from navcaddy.routing.providers import KeywordIntentProvider, extract_entities


def test_slang_and_compound_numbers_are_expanded() -> None:
    result = normalize_input("Hit my 7i one fifty out")
    assert result.normalized == "Hit my 7-iron 150 out"
    assert result.was_modified
    kinds = {modification.kind for modification in result.modifications}
    assert kinds == {ModificationType.SLANG, ModificationType.NUMBER}


def test_longest_phrases_win() -> None:
    assert normalize_input("flat stick on the dance floor").normalized == "putter on green"
    assert normalize_input("seven iron from one hundred fifty").normalized == "7-iron from 150"


def test_profanity_is_masked() -> None:
    result = normalize_input("damn slice again")
    assert result.normalized == "**** slice again"
    assert result.modifications[0].kind is ModificationType.PROFANITY
    assert normalize_input("hello there").normalized == "hello there"


def test_plain_and_blank_input_are_unchanged() -> None:
    assert not normalize_input("what's the weather").was_modified
    assert normalize_input("   ").normalized == "   "


def test_entities_read_normalized_text() -> None:
    entities = extract_entities("PW from one twenty yards in the rough")
    assert entities.club == "pitching wedge"
    assert entities.yardage == 120
    assert entities.lie is Lie.ROUGH


def test_keyword_provider_understands_slang() -> None:
    parsed = asyncio.run(KeywordIntentProvider().parse("big dog feels long today"))
    assert parsed.intent_type is IntentType.CLUB_ADJUSTMENT
    assert parsed.entities.club == "driver"
    assert parsed.user_goal == "big dog feels long today"
