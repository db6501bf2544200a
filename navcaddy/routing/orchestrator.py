"""Stateless transition from classification results to routing decisions."""

from __future__ import annotations

import logging
from typing import List, assert_never

from .. import telemetry
from .classification import (
    Clarify,
    ClassificationResult,
    Confirm,
    ConfirmationRequired,
    Error,
    Navigate,
    NoNavigation,
    PrerequisiteMissing,
    Route,
    RoutingResult,
)
from .intents import IntentType, ParsedIntent, RoutingTarget
from .messages import (
    DEFAULT_NO_NAVIGATION_RESPONSE,
    NO_NAVIGATION_RESPONSES,
    NO_TARGET_CONFIRM_MESSAGE,
    PREREQUISITE_MESSAGES,
)
from .prerequisites import (
    Prerequisite,
    PrerequisiteChecker,
    first_by_priority,
    prerequisites_for,
)

logger = logging.getLogger(__name__)

NO_NAVIGATION_INTENTS = frozenset(
    {IntentType.PATTERN_QUERY, IntentType.HELP_REQUEST, IntentType.FEEDBACK}
)


def _placeholder_intent(intent_id: str) -> ParsedIntent:
    return ParsedIntent(
        intent_id=intent_id, intent_type=IntentType.HELP_REQUEST, confidence=0.0
    )


class RoutingOrchestrator:
    def __init__(self, prerequisite_checker: PrerequisiteChecker) -> None:
        self._checker = prerequisite_checker

    @staticmethod
    def requires_navigation(intent_type: IntentType) -> bool:
        return intent_type not in NO_NAVIGATION_INTENTS

    @staticmethod
    def get_prerequisites(intent_type: IntentType) -> List[Prerequisite]:
        return prerequisites_for(intent_type)

    async def route(self, classification: ClassificationResult) -> RoutingResult:
        result = await self._transition(classification)
        telemetry.record_routing_decision(result.kind)
        logger.debug(
            "routing_decision",
            extra={"input": classification.kind, "result": result.kind},
        )
        return result

    async def _transition(self, classification: ClassificationResult) -> RoutingResult:
        match classification:
            case Route(intent=intent, target=target):
                return await self._route(intent, target)
            case Confirm(intent=intent, message=message):
                return ConfirmationRequired(intent=intent, message=message)
            case Clarify(message=message):
                return NoNavigation(
                    intent=_placeholder_intent("clarification"), response=message
                )
            case Error(message=message):
                return NoNavigation(intent=_placeholder_intent("error"), response=message)
            case _:
                assert_never(classification)

    async def _route(
        self, intent: ParsedIntent, target: RoutingTarget | None
    ) -> RoutingResult:
        if not self.requires_navigation(intent.intent_type):
            response = NO_NAVIGATION_RESPONSES.get(
                intent.intent_type, DEFAULT_NO_NAVIGATION_RESPONSE
            )
            return NoNavigation(intent=intent, response=response)

        required = prerequisites_for(intent.intent_type)
        if required:
            missing = await self._checker.check_all(required)
            if missing:
                return PrerequisiteMissing(
                    intent=intent,
                    missing=missing,
                    message=PREREQUISITE_MESSAGES[first_by_priority(missing)],
                )

        if target is None:
            return ConfirmationRequired(intent=intent, message=NO_TARGET_CONFIRM_MESSAGE)
        return Navigate(target=target, intent=intent)


__all__ = ["NO_NAVIGATION_INTENTS", "RoutingOrchestrator"]
