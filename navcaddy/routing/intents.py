"""Intent types, routing targets and the static intent registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..memory.models import Lie


class IntentType(str, Enum):
    CLUB_ADJUSTMENT = "CLUB_ADJUSTMENT"
    RECOVERY_CHECK = "RECOVERY_CHECK"
    SHOT_RECOMMENDATION = "SHOT_RECOMMENDATION"
    SCORE_ENTRY = "SCORE_ENTRY"
    PATTERN_QUERY = "PATTERN_QUERY"
    DRILL_REQUEST = "DRILL_REQUEST"
    WEATHER_CHECK = "WEATHER_CHECK"
    STATS_LOOKUP = "STATS_LOOKUP"
    ROUND_START = "ROUND_START"
    ROUND_END = "ROUND_END"
    EQUIPMENT_INFO = "EQUIPMENT_INFO"
    COURSE_INFO = "COURSE_INFO"
    SETTINGS_CHANGE = "SETTINGS_CHANGE"
    HELP_REQUEST = "HELP_REQUEST"
    FEEDBACK = "FEEDBACK"


class Module(str, Enum):
    CADDY = "CADDY"
    COACH = "COACH"
    RECOVERY = "RECOVERY"
    SETTINGS = "SETTINGS"


class RoutingTarget(BaseModel):
    module: Module
    screen: str
    parameters: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class ExtractedEntities(BaseModel):
    """Entities pulled from an utterance.

    Out-of-range values are sanitized instead of rejected because they come
    from free text.
    """

    club: str | None = None
    yardage: int | None = None
    lie: Lie | None = None
    wind: str | None = None
    fatigue: int | None = None
    pain: str | None = None
    score_context: str | None = None
    hole_number: int | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("yardage")
    @classmethod
    def _positive_yardage(cls, value: int | None) -> int | None:
        return value if value is not None and value > 0 else None

    @field_validator("fatigue")
    @classmethod
    def _clamp_fatigue(cls, value: int | None) -> int | None:
        return None if value is None else min(10, max(1, value))

    @field_validator("hole_number")
    @classmethod
    def _valid_hole(cls, value: int | None) -> int | None:
        return value if value is not None and 1 <= value <= 18 else None

    def as_parameters(self) -> Dict[str, Any]:
        """Navigation parameters derived from the entities that are present."""
        params: Dict[str, Any] = {}
        if self.club is not None:
            params["clubId"] = self.club
        if self.yardage is not None:
            params["yardage"] = self.yardage
        if self.lie is not None:
            params["lie"] = self.lie.value
        if self.wind is not None:
            params["wind"] = self.wind
        if self.hole_number is not None:
            params["hole"] = self.hole_number
        return params


class ParsedIntent(BaseModel):
    intent_id: str
    intent_type: IntentType
    confidence: float = Field(ge=0, le=1)
    entities: ExtractedEntities = Field(default_factory=ExtractedEntities)
    user_goal: str | None = None
    routing_target: RoutingTarget | None = None

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class IntentSchema:
    intent_type: IntentType
    display_name: str
    description: str
    default_routing_target: RoutingTarget | None
    requires_navigation: bool
    example_phrases: Tuple[str, ...] = field(default_factory=tuple)
    keywords: Tuple[str, ...] = field(default_factory=tuple)


def _target(module: Module, screen: str, **parameters: Any) -> RoutingTarget:
    return RoutingTarget(module=module, screen=screen, parameters=parameters)


_SCHEMAS: Tuple[IntentSchema, ...] = (
    IntentSchema(
        IntentType.CLUB_ADJUSTMENT,
        "Club Adjustment",
        "Adjust club distances or yardage expectations",
        _target(Module.CADDY, "club_adjustment"),
        True,
        (
            "My 7-iron feels long today",
            "I need to adjust my driver distance",
            "Update my pitching wedge to 120 yards",
            "Recalibrate my 3-wood",
        ),
        ("adjust", "distance", "yardage", "iron", "driver", "wedge", "recalibrate"),
    ),
    IntentSchema(
        IntentType.RECOVERY_CHECK,
        "Recovery Check",
        "Check recovery status and readiness",
        _target(Module.RECOVERY, "overview"),
        True,
        (
            "How's my recovery looking?",
            "Am I ready to play today?",
            "What's my readiness score?",
        ),
        ("recovery", "readiness", "sore", "tired", "body", "rest", "sleep"),
    ),
    IntentSchema(
        IntentType.SHOT_RECOMMENDATION,
        "Shot Recommendation",
        "Get shot advice based on the current situation",
        _target(Module.CADDY, "live_caddy", expandStrategy=True),
        True,
        (
            "What club should I hit?",
            "150 yards into the wind, what's the play?",
            "Recommend a shot from the rough",
        ),
        ("shot", "recommend", "advice", "which club", "what club", "strategy", "play"),
    ),
    IntentSchema(
        IntentType.SCORE_ENTRY,
        "Score Entry",
        "Enter or update score for a hole",
        _target(Module.CADDY, "score_entry"),
        True,
        ("I got a birdie on this hole", "Mark down a par", "Enter score for hole 7"),
        ("score", "birdie", "bogey", "par", "eagle", "record"),
    ),
    IntentSchema(
        IntentType.PATTERN_QUERY,
        "Pattern Query",
        "Ask about historical miss patterns or tendencies",
        None,
        False,
        (
            "What are my miss patterns with 7-iron?",
            "Do I slice when I'm under pressure?",
            "Am I pushing my irons lately?",
        ),
        ("pattern", "miss", "tendency", "tendencies", "slice", "hook", "push", "pull"),
    ),
    IntentSchema(
        IntentType.DRILL_REQUEST,
        "Drill Request",
        "Request a practice drill or training exercise",
        _target(Module.COACH, "drill"),
        True,
        ("Give me a drill for my slice", "I need putting practice"),
        ("drill", "practice", "exercise", "training", "improve"),
    ),
    IntentSchema(
        IntentType.WEATHER_CHECK,
        "Weather Check",
        "Check current weather conditions",
        _target(Module.CADDY, "weather"),
        True,
        ("What's the weather looking like?", "How's the wind today?"),
        ("weather", "wind", "rain", "temperature", "forecast"),
    ),
    IntentSchema(
        IntentType.STATS_LOOKUP,
        "Stats Lookup",
        "Look up statistics and performance data",
        _target(Module.CADDY, "stats"),
        True,
        ("Show my stats", "What's my average score?"),
        ("stats", "statistics", "performance", "average", "handicap"),
    ),
    IntentSchema(
        IntentType.ROUND_START,
        "Round Start",
        "Start a new round of golf",
        _target(Module.CADDY, "round_start"),
        True,
        ("Start a new round", "I'm playing at Pebble Beach today", "Let's tee off"),
        ("start round", "new round", "begin", "tee off"),
    ),
    IntentSchema(
        IntentType.ROUND_END,
        "Round End",
        "End the current round and view the summary",
        _target(Module.CADDY, "round_end"),
        True,
        ("Finish this round", "End round", "I'm done playing"),
        ("end round", "finish", "done playing", "complete round"),
    ),
    IntentSchema(
        IntentType.EQUIPMENT_INFO,
        "Equipment Info",
        "Get information about equipment and bag contents",
        _target(Module.SETTINGS, "equipment"),
        True,
        ("What's in my bag?", "Show my club specs"),
        ("equipment", "bag", "specs", "shaft"),
    ),
    IntentSchema(
        IntentType.COURSE_INFO,
        "Course Info",
        "Get course information and hole details",
        _target(Module.CADDY, "course_info"),
        True,
        ("Tell me about this hole", "Show the course layout"),
        ("course", "hole", "layout", "map"),
    ),
    IntentSchema(
        IntentType.SETTINGS_CHANGE,
        "Settings Change",
        "Change app settings or preferences",
        _target(Module.SETTINGS, "settings"),
        True,
        ("Change my settings", "Change units to metric"),
        ("settings", "preferences", "units", "notifications", "configure"),
    ),
    IntentSchema(
        IntentType.HELP_REQUEST,
        "Help Request",
        "Get help or instructions",
        None,
        False,
        ("Help me", "What can you do?"),
        ("help", "how do i", "instructions", "tutorial"),
    ),
    IntentSchema(
        IntentType.FEEDBACK,
        "Feedback",
        "Provide feedback about the assistant",
        None,
        False,
        ("I have feedback", "I found a bug"),
        ("feedback", "bug", "report", "suggestion"),
    ),
)

INTENT_REGISTRY: Mapping[IntentType, IntentSchema] = MappingProxyType(
    {schema.intent_type: schema for schema in _SCHEMAS}
)


def get_schema(intent_type: IntentType) -> IntentSchema:
    try:
        return INTENT_REGISTRY[intent_type]
    except KeyError:
        raise ValueError(f"Unknown intent: {intent_type}") from None


def no_navigation_intents() -> List[IntentType]:
    return [s.intent_type for s in _SCHEMAS if not s.requires_navigation]


def intents_for_module(module: Module) -> List[IntentType]:
    return [
        s.intent_type
        for s in _SCHEMAS
        if s.default_routing_target is not None
        and s.default_routing_target.module is module
    ]


# (session context key, target parameter) pairs filled in when the utterance
# itself carries no value.
_SESSION_PARAMETERS: Mapping[IntentType, Tuple[Tuple[str, str], ...]] = MappingProxyType(
    {IntentType.COURSE_INFO: (("course_id", "courseId"),)}
)


def resolve_target(
    intent: ParsedIntent, context: Mapping[str, Any] | None = None
) -> RoutingTarget | None:
    """The intent's own target, or the registry default enriched with entities.

    Session facts from ``context`` fill parameters such as the selected course.
    """

    if intent.routing_target is not None:
        return intent.routing_target
    default = get_schema(intent.intent_type).default_routing_target
    if default is None:
        return None
    parameters = {**default.parameters, **intent.entities.as_parameters()}
    for key, name in _SESSION_PARAMETERS.get(intent.intent_type, ()):
        value = (context or {}).get(key)
        if value is not None and name not in parameters:
            parameters[name] = value
    return default.model_copy(update={"parameters": parameters})


class ThresholdAction(str, Enum):
    ROUTE = "ROUTE"
    CONFIRM = "CONFIRM"
    CLARIFY = "CLARIFY"


@dataclass(frozen=True)
class ConfidenceThresholds:
    route: float = 0.75
    confirm: float = 0.50

    def action_for(self, confidence: float) -> ThresholdAction:
        if confidence >= self.route:
            return ThresholdAction.ROUTE
        if confidence >= self.confirm:
            return ThresholdAction.CONFIRM
        return ThresholdAction.CLARIFY


DEFAULT_THRESHOLDS = ConfidenceThresholds()


__all__ = [
    "IntentType",
    "Module",
    "RoutingTarget",
    "ExtractedEntities",
    "ParsedIntent",
    "IntentSchema",
    "INTENT_REGISTRY",
    "get_schema",
    "no_navigation_intents",
    "intents_for_module",
    "resolve_target",
    "ThresholdAction",
    "ConfidenceThresholds",
    "DEFAULT_THRESHOLDS",
]
