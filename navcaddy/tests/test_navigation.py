from __future__ import annotations

from typing import List

from navcaddy.routing.classification import (
    ConfirmationRequired,
    Navigate,
    NoNavigation,
    PrerequisiteMissing,
)
from navcaddy.routing.intents import IntentType, Module, ParsedIntent, RoutingTarget
from navcaddy.routing.navigation import (
    Destination,
    NavigationExecutor,
    NavigationFailed,
    Navigated,
    PromptPrerequisites,
    RequestConfirmation,
    ShowInlineResponse,
    build_destination,
)
from navcaddy.routing.prerequisites import Prerequisite

INTENT = ParsedIntent(intent_id="nav", intent_type=IntentType.ROUND_START, confidence=0.9)


def _target(module: Module, screen: str, **parameters) -> RoutingTarget:
    return RoutingTarget(module=module, screen=screen, parameters=parameters)


def test_query_parameters_are_percent_encoded() -> None:
    destination = build_destination(
        _target(Module.CADDY, "round_start", courseName="Pebble Beach")
    )
    assert destination.route == "caddy/round_start?course=Pebble%20Beach"
    assert destination.params == {"courseName": "Pebble Beach"}


def test_query_order_and_unknown_parameters() -> None:
    destination = build_destination(
        _target(
            Module.CADDY,
            "shot_recommendation",
            lie="ROUGH",
            yardage=150,
            expandStrategy=True,
        )
    )
    assert destination.route == "caddy/shot_recommendation?yardage=150&lie=ROUGH"
    assert "expandStrategy" not in destination.params


def test_path_parameter() -> None:
    destination = build_destination(
        _target(Module.CADDY, "round_end_summary", roundId="r 42")
    )
    assert destination.route == "caddy/round_end_summary/r%2042"


def test_plain_screens() -> None:
    assert build_destination(_target(Module.RECOVERY, "overview")).route == "recovery/overview"
    assert build_destination(_target(Module.SETTINGS, "help")).route == "settings/help"
    assert (
        build_destination(_target(Module.CADDY, "stats", statType="putting")).route
        == "caddy/stats?type=putting"
    )


def test_executor_navigates_and_calls_navigator() -> None:
    seen: List[Destination] = []
    executor = NavigationExecutor(navigator=seen.append)
    target = _target(Module.COACH, "drill", focusArea="short game")

    action = executor.execute(Navigate(target=target, intent=INTENT))

    assert isinstance(action, Navigated)
    assert action.destination.route == "coach/drill?focusArea=short%20game"
    assert seen == [action.destination]


def test_executor_reports_unknown_screen() -> None:
    seen: List[Destination] = []
    executor = NavigationExecutor(navigator=seen.append)
    target = _target(Module.COACH, "nowhere")

    action = executor.execute(Navigate(target=target, intent=INTENT))

    assert isinstance(action, NavigationFailed)
    assert action.error.startswith("Invalid navigation target:")
    assert action.target == target
    assert seen == []


def test_executor_reports_missing_required_parameter() -> None:
    executor = NavigationExecutor()
    action = executor.execute(
        Navigate(target=_target(Module.CADDY, "course_info"), intent=INTENT)
    )
    assert isinstance(action, NavigationFailed)
    assert "courseId" in action.error


def test_executor_maps_non_navigation_results() -> None:
    executor = NavigationExecutor()

    inline = executor.execute(NoNavigation(intent=INTENT, response="Hello"))
    assert inline == ShowInlineResponse(text="Hello")

    prompt = executor.execute(
        PrerequisiteMissing(
            intent=INTENT, missing=[Prerequisite.ROUND_ACTIVE], message="Start a round"
        )
    )
    assert isinstance(prompt, PromptPrerequisites)
    assert prompt.missing == [Prerequisite.ROUND_ACTIVE]

    confirm = executor.execute(ConfirmationRequired(intent=INTENT, message="Sure?"))
    assert isinstance(confirm, RequestConfirmation)
    assert confirm.intent == INTENT
