"""Turn provider output into a routing-ready classification result."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .clarification import ClarificationHandler
from .classification import ClassificationResult, Confirm, Error, Route
from .intents import (
    DEFAULT_THRESHOLDS,
    ConfidenceThresholds,
    ThresholdAction,
    get_schema,
    resolve_target,
)
from .messages import (
    EMPTY_INPUT_MESSAGE,
    NO_TARGET_CONFIRM_MESSAGE,
    PROVIDER_ERROR_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
)
from .providers import IntentProvider, IntentProviderError

logger = logging.getLogger(__name__)


class IntentClassifier:
    def __init__(
        self,
        provider: IntentProvider,
        clarifier: ClarificationHandler | None = None,
        thresholds: ConfidenceThresholds = DEFAULT_THRESHOLDS,
    ) -> None:
        self._provider = provider
        self._clarifier = clarifier or ClarificationHandler()
        self._thresholds = thresholds

    async def classify(
        self, text: str, context: Mapping[str, Any] | None = None
    ) -> ClassificationResult:
        if not text or not text.strip():
            return Error(cause="empty_input", message=EMPTY_INPUT_MESSAGE)

        try:
            intent = await self._provider.parse(text, context)
        except IntentProviderError as exc:
            logger.warning(
                "intent_provider_failed",
                extra={"provider": self._provider.name, "error": str(exc)},
            )
            return Error(cause=type(exc).__name__, message=PROVIDER_ERROR_MESSAGE)
        except Exception as exc:
            logger.exception("intent_classification_failed")
            return Error(cause=type(exc).__name__, message=UNEXPECTED_ERROR_MESSAGE)

        action = self._thresholds.action_for(intent.confidence)
        if action is ThresholdAction.ROUTE:
            target = resolve_target(intent, context)
            if target is None and get_schema(intent.intent_type).requires_navigation:
                return Confirm(intent=intent, message=NO_TARGET_CONFIRM_MESSAGE)
            return Route(intent=intent, target=target)
        if action is ThresholdAction.CONFIRM:
            display = get_schema(intent.intent_type).display_name.lower()
            return Confirm(intent=intent, message=f"Did you want to {display}?")
        return self._clarifier.clarify(text, intent)


__all__ = ["IntentClassifier"]
