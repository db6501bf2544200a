from __future__ import annotations

import asyncio
from typing import Any, Mapping

from navcaddy.routing.classification import Clarify, Confirm, Error, Route
from navcaddy.routing.classifier import IntentClassifier
from navcaddy.routing.clarification import DEFAULT_SUGGESTIONS, ClarificationHandler
from navcaddy.routing.intents import (
    ExtractedEntities,
    IntentType,
    Module,
    ParsedIntent,
)
from navcaddy.routing.messages import PROVIDER_ERROR_MESSAGE, UNEXPECTED_ERROR_MESSAGE
from navcaddy.routing.navigation import build_destination
from navcaddy.routing.prerequisites import SessionState
from navcaddy.routing.providers import (
    IntentProvider,
    IntentProviderTimeout,
    KeywordIntentProvider,
)


class FixedProvider(IntentProvider):
    name = "fixed"

    def __init__(self, intent: ParsedIntent | None = None, error: Exception | None = None):
        self.intent = intent
        self.error = error
        self.calls = 0

    async def parse(
        self, text: str, context: Mapping[str, Any] | None = None
    ) -> ParsedIntent:
        self.calls += 1
        if self.error is not None:
            raise self.error
        assert self.intent is not None
        return self.intent


def _intent(intent_type: IntentType, confidence: float, **entities: Any) -> ParsedIntent:
    return ParsedIntent(
        intent_id="fixed",
        intent_type=intent_type,
        confidence=confidence,
        entities=ExtractedEntities(**entities),
    )


def _classify(provider: IntentProvider, text: str):
    return asyncio.run(IntentClassifier(provider).classify(text))


def test_blank_input_short_circuits_provider() -> None:
    provider = FixedProvider(_intent(IntentType.FEEDBACK, 0.9))
    result = _classify(provider, "   ")
    assert isinstance(result, Error)
    assert result.cause == "empty_input"
    assert provider.calls == 0


def test_high_confidence_routes_with_entities() -> None:
    provider = FixedProvider(_intent(IntentType.SCORE_ENTRY, 0.9, hole_number=7))
    result = _classify(provider, "enter score for hole 7")
    assert isinstance(result, Route)
    assert result.target is not None
    assert result.target.module is Module.CADDY
    assert result.target.screen == "score_entry"
    assert result.target.parameters == {"hole": 7}


def test_high_confidence_inline_intent_routes_without_target() -> None:
    provider = FixedProvider(_intent(IntentType.PATTERN_QUERY, 0.9))
    result = _classify(provider, "what are my miss patterns")
    assert isinstance(result, Route)
    assert result.target is None


def test_mid_confidence_asks_for_confirmation() -> None:
    provider = FixedProvider(_intent(IntentType.WEATHER_CHECK, 0.6))
    result = _classify(provider, "how's the wind")
    assert isinstance(result, Confirm)
    assert result.message == "Did you want to weather check?"


def test_provider_errors_become_error_results() -> None:
    timeout = _classify(FixedProvider(error=IntentProviderTimeout("slow")), "hello there")
    assert isinstance(timeout, Error)
    assert timeout.cause == "IntentProviderTimeout"
    assert timeout.message == PROVIDER_ERROR_MESSAGE

    boom = _classify(FixedProvider(error=RuntimeError("boom")), "hello there")
    assert isinstance(boom, Error)
    assert boom.message == UNEXPECTED_ERROR_MESSAGE


def test_low_confidence_short_input_gets_default_suggestions() -> None:
    result = _classify(KeywordIntentProvider(), "blorp")
    assert isinstance(result, Clarify)
    assert result.suggestions == list(DEFAULT_SUGGESTIONS)
    assert result.message == "I'm not quite sure what you need. Did you mean:"
    assert result.original_input == "blorp"


def test_clarification_uses_context_words() -> None:
    result = ClarificationHandler().clarify("something feels off with my swing today")
    assert result.suggestions == [
        IntentType.CLUB_ADJUSTMENT,
        IntentType.PATTERN_QUERY,
        IntentType.DRILL_REQUEST,
    ]
    assert result.message.startswith("I'm not quite sure what you're referring to")


def test_clarification_puts_parsed_intent_first_and_dedupes() -> None:
    parsed = _intent(IntentType.DRILL_REQUEST, 0.4)
    suggestions = ClarificationHandler().suggestions(
        "something feels off with my swing today", parsed
    )
    assert suggestions == [
        IntentType.DRILL_REQUEST,
        IntentType.CLUB_ADJUSTMENT,
        IntentType.PATTERN_QUERY,
    ]
    assert len(set(suggestions)) == len(suggestions)


def test_course_info_takes_course_from_session() -> None:
    provider = FixedProvider(_intent(IntentType.COURSE_INFO, 0.9))
    session = SessionState(round_active=True, course_id="pebble-beach")

    result = asyncio.run(
        IntentClassifier(provider).classify("tell me about this course", session.as_context())
    )

    assert isinstance(result, Route)
    assert result.target is not None
    assert result.target.parameters == {"courseId": "pebble-beach"}
    assert build_destination(result.target).route == "caddy/course_info?id=pebble-beach"

    without_session = _classify(provider, "tell me about this course")
    assert isinstance(without_session, Route)
    assert without_session.target is not None
    assert "courseId" not in without_session.target.parameters
