"""Closed result types produced by classification and routing."""

from __future__ import annotations

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .intents import IntentType, ParsedIntent, RoutingTarget
from .prerequisites import Prerequisite

MAX_SUGGESTIONS = 3


class _Result(BaseModel):
    model_config = ConfigDict(frozen=True)


class Route(_Result):
    """High-confidence intent; ``target`` is None for intents answered inline."""

    kind: Literal["route"] = "route"
    intent: ParsedIntent
    target: RoutingTarget | None = None


class Confirm(_Result):
    kind: Literal["confirm"] = "confirm"
    intent: ParsedIntent
    message: str


class Clarify(_Result):
    kind: Literal["clarify"] = "clarify"
    suggestions: List[IntentType] = Field(default_factory=list, max_length=MAX_SUGGESTIONS)
    message: str
    original_input: str


class Error(_Result):
    kind: Literal["error"] = "error"
    cause: str
    message: str


ClassificationResult = Annotated[
    Union[Route, Confirm, Clarify, Error], Field(discriminator="kind")
]


class Navigate(_Result):
    kind: Literal["navigate"] = "navigate"
    target: RoutingTarget
    intent: ParsedIntent


class NoNavigation(_Result):
    kind: Literal["no_navigation"] = "no_navigation"
    intent: ParsedIntent
    response: str


class PrerequisiteMissing(_Result):
    kind: Literal["prerequisite_missing"] = "prerequisite_missing"
    intent: ParsedIntent
    missing: List[Prerequisite]
    message: str


class ConfirmationRequired(_Result):
    kind: Literal["confirmation_required"] = "confirmation_required"
    intent: ParsedIntent
    message: str


RoutingResult = Annotated[
    Union[Navigate, NoNavigation, PrerequisiteMissing, ConfirmationRequired],
    Field(discriminator="kind"),
]


__all__ = [
    "MAX_SUGGESTIONS",
    "Route",
    "Confirm",
    "Clarify",
    "Error",
    "ClassificationResult",
    "Navigate",
    "NoNavigation",
    "PrerequisiteMissing",
    "ConfirmationRequired",
    "RoutingResult",
]
