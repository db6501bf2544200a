"""Map routing results onto concrete navigation actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Literal, Mapping, Tuple, Union, assert_never
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict

from .. import telemetry
from .classification import (
    ConfirmationRequired,
    Navigate,
    NoNavigation,
    PrerequisiteMissing,
    RoutingResult,
)
from .guardrails import DisclaimerType, apply_guardrails, forbidden_phrases
from .intents import Module, ParsedIntent, RoutingTarget
from .prerequisites import Prerequisite

logger = logging.getLogger(__name__)


class UnknownDestination(ValueError):
    """Raised when a routing target has no destination mapping."""


@dataclass(frozen=True)
class _Screen:
    path: str
    # (parameter key, query name); rendered in this order when present.
    query: Tuple[Tuple[str, str], ...] = ()
    required: Tuple[str, ...] = ()
    path_param: str | None = None


_DESTINATIONS: Mapping[Tuple[Module, str], _Screen] = MappingProxyType(
    {
        (Module.CADDY, "club_adjustment"): _Screen(
            "caddy/club_adjustment", query=(("clubId", "clubId"),)
        ),
        (Module.CADDY, "shot_recommendation"): _Screen(
            "caddy/shot_recommendation",
            query=(("yardage", "yardage"), ("lie", "lie"), ("wind", "wind")),
        ),
        (Module.CADDY, "live_caddy"): _Screen("caddy/live_caddy"),
        (Module.CADDY, "round_start"): _Screen(
            "caddy/round_start", query=(("courseName", "course"),)
        ),
        (Module.CADDY, "score_entry"): _Screen(
            "caddy/score_entry", query=(("hole", "hole"),)
        ),
        (Module.CADDY, "round_end_summary"): _Screen(
            "caddy/round_end_summary", required=("roundId",), path_param="roundId"
        ),
        (Module.CADDY, "round_end"): _Screen("caddy/round_end"),
        (Module.CADDY, "weather"): _Screen("caddy/weather"),
        (Module.CADDY, "stats"): _Screen("caddy/stats", query=(("statType", "type"),)),
        (Module.CADDY, "course_info"): _Screen(
            "caddy/course_info", query=(("courseId", "id"),), required=("courseId",)
        ),
        (Module.COACH, "drill"): _Screen(
            "coach/drill", query=(("drillId", "drillId"), ("focusArea", "focusArea"))
        ),
        (Module.COACH, "practice"): _Screen("coach/practice"),
        (Module.RECOVERY, "overview"): _Screen("recovery/overview"),
        (Module.RECOVERY, "data_entry"): _Screen(
            "recovery/data_entry", query=(("dataType", "type"),)
        ),
        (Module.SETTINGS, "equipment"): _Screen("settings/equipment"),
        (Module.SETTINGS, "settings"): _Screen(
            "settings/settings", query=(("settingKey", "key"),)
        ),
        (Module.SETTINGS, "help"): _Screen("settings/help"),
    }
)


@dataclass(frozen=True)
class Destination:
    module: Module
    screen: str
    route: str
    params: Dict[str, Any] = field(default_factory=dict)


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        value = str(value).lower()
    return quote(str(value), safe="")


def build_destination(target: RoutingTarget) -> Destination:
    """Resolve ``target`` against the destination table.

    Raises :class:`UnknownDestination` for an unmapped screen or a missing
    required parameter.
    """

    screen = _DESTINATIONS.get((target.module, target.screen))
    if screen is None:
        raise UnknownDestination(
            f"unknown screen '{target.screen}' in module {target.module.value}"
        )

    params = {k: v for k, v in target.parameters.items() if v is not None}
    missing = [key for key in screen.required if key not in params]
    if missing:
        raise UnknownDestination(
            f"missing required parameter(s) {', '.join(missing)} for {target.screen}"
        )

    route = screen.path
    if screen.path_param is not None:
        route = f"{route}/{_encode(params[screen.path_param])}"
    query = [
        f"{name}={_encode(params[key])}" for key, name in screen.query if key in params
    ]
    if query:
        route = f"{route}?{'&'.join(query)}"

    known = {key for key, _ in screen.query} | set(screen.required)
    return Destination(
        module=target.module,
        screen=target.screen,
        route=route,
        params={k: v for k, v in params.items() if k in known},
    )


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class Navigated(_Action):
    kind: Literal["navigated"] = "navigated"
    destination: Destination


class ShowInlineResponse(_Action):
    kind: Literal["show_inline_response"] = "show_inline_response"
    text: str
    disclaimer: DisclaimerType | None = None


class PromptPrerequisites(_Action):
    kind: Literal["prompt_prerequisites"] = "prompt_prerequisites"
    message: str
    missing: List[Prerequisite]


class RequestConfirmation(_Action):
    kind: Literal["request_confirmation"] = "request_confirmation"
    message: str
    intent: ParsedIntent


class NavigationFailed(_Action):
    kind: Literal["navigation_failed"] = "navigation_failed"
    error: str
    target: RoutingTarget


NavigationAction = Union[
    Navigated, ShowInlineResponse, PromptPrerequisites, RequestConfirmation, NavigationFailed
]

Navigator = Callable[[Destination], None]


class NavigationExecutor:
    """Convert a routing result into an action, optionally driving a navigator."""

    def __init__(self, navigator: Navigator | None = None) -> None:
        self._navigator = navigator

    def execute(self, result: RoutingResult) -> NavigationAction:
        action = self._dispatch(result)
        telemetry.record_navigation_action(action.kind)
        return action

    def _dispatch(self, result: RoutingResult) -> NavigationAction:
        match result:
            case Navigate(target=target):
                return self._navigate(target)
            case NoNavigation(response=response):
                return self._inline(response)
            case PrerequisiteMissing(message=message, missing=missing):
                return PromptPrerequisites(message=message, missing=list(missing))
            case ConfirmationRequired(message=message, intent=intent):
                return RequestConfirmation(message=message, intent=intent)
            case _:
                assert_never(result)

    def _inline(self, response: str) -> ShowInlineResponse:
        phrases = forbidden_phrases(response)
        if phrases:
            logger.warning("persona_forbidden_phrase", extra={"phrases": phrases})
        text, check = apply_guardrails(response)
        return ShowInlineResponse(text=text, disclaimer=check.disclaimer)

    def _navigate(self, target: RoutingTarget) -> NavigationAction:
        try:
            destination = build_destination(target)
        except UnknownDestination as exc:
            logger.error(
                "navigation_failed",
                extra={
                    "target_module": target.module.value,
                    "screen": target.screen,
                    "error": str(exc),
                },
            )
            return NavigationFailed(
                error=f"Invalid navigation target: {exc}", target=target
            )

        if self._navigator is not None:
            self._navigator(destination)
        return Navigated(destination=destination)


__all__ = [
    "Destination",
    "UnknownDestination",
    "build_destination",
    "Navigated",
    "ShowInlineResponse",
    "PromptPrerequisites",
    "RequestConfirmation",
    "NavigationFailed",
    "NavigationAction",
    "NavigationExecutor",
]
