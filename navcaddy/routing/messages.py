"""Canned user-facing text for routing outcomes."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .intents import IntentType
from .prerequisites import Prerequisite

PREREQUISITE_MESSAGES: Mapping[Prerequisite, str] = MappingProxyType(
    {
        Prerequisite.RECOVERY_DATA: (
            "I don't have any recovery data yet. Log your sleep, HRV, or "
            "readiness score first, and I'll give you insights."
        ),
        Prerequisite.ROUND_ACTIVE: (
            "You need to start a round first. Would you like to start a new "
            "round now?"
        ),
        Prerequisite.BAG_CONFIGURED: (
            "Your bag isn't configured yet. Set up your clubs and distances so "
            "I can give you better recommendations."
        ),
        Prerequisite.COURSE_SELECTED: (
            "Which course are you playing? Select a course to get specific "
            "information."
        ),
    }
)

NO_NAVIGATION_RESPONSES: Mapping[IntentType, str] = MappingProxyType(
    {
        IntentType.PATTERN_QUERY: (
            "Let me check your miss patterns. Based on your recent shots, I'll "
            "give you insights."
        ),
        IntentType.HELP_REQUEST: (
            "I'm Bones, your digital caddy. Ask me about club selection, check "
            "your recovery, enter scores, or get coaching tips. What can I help "
            "you with?"
        ),
        IntentType.FEEDBACK: (
            "Thanks for the feedback! I'm always learning to serve you better."
        ),
    }
)

EMPTY_INPUT_MESSAGE = "Please say or type something."
PROVIDER_ERROR_MESSAGE = "Unable to process your request. Please try again."
UNEXPECTED_ERROR_MESSAGE = "Something went wrong. Please try again."
NO_TARGET_CONFIRM_MESSAGE = "I'll help you with that."
DEFAULT_NO_NAVIGATION_RESPONSE = "I can help with that."

__all__ = [
    "PREREQUISITE_MESSAGES",
    "NO_NAVIGATION_RESPONSES",
    "EMPTY_INPUT_MESSAGE",
    "PROVIDER_ERROR_MESSAGE",
    "UNEXPECTED_ERROR_MESSAGE",
    "NO_TARGET_CONFIRM_MESSAGE",
    "DEFAULT_NO_NAVIGATION_RESPONSE",
]
