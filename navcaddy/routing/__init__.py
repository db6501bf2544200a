from .clarification import ClarificationHandler
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
from .classifier import IntentClassifier
from .guardrails import DisclaimerType, apply_guardrails
from .intents import (
    INTENT_REGISTRY,
    ConfidenceThresholds,
    ExtractedEntities,
    IntentType,
    Module,
    ParsedIntent,
    RoutingTarget,
)
from .navigation import (
    Destination,
    NavigationAction,
    NavigationExecutor,
    NavigationFailed,
    Navigated,
    PromptPrerequisites,
    RequestConfirmation,
    ShowInlineResponse,
    build_destination,
)
from .normalizer import NormalizationResult, normalize_input
from .orchestrator import RoutingOrchestrator
from .prerequisites import (
    Prerequisite,
    PrerequisiteChecker,
    SessionPrerequisiteChecker,
    SessionState,
)
from .providers import (
    IntentProvider,
    IntentProviderError,
    IntentProviderTimeout,
    KeywordIntentProvider,
)

__all__ = [
    "INTENT_REGISTRY",
    "ClarificationHandler",
    "Clarify",
    "ClassificationResult",
    "ConfidenceThresholds",
    "Confirm",
    "ConfirmationRequired",
    "Destination",
    "DisclaimerType",
    "Error",
    "ExtractedEntities",
    "IntentClassifier",
    "IntentProvider",
    "IntentProviderError",
    "IntentProviderTimeout",
    "IntentType",
    "KeywordIntentProvider",
    "Module",
    "Navigate",
    "NavigationAction",
    "NavigationExecutor",
    "NavigationFailed",
    "Navigated",
    "NoNavigation",
    "NormalizationResult",
    "ParsedIntent",
    "Prerequisite",
    "PrerequisiteChecker",
    "PrerequisiteMissing",
    "PromptPrerequisites",
    "RequestConfirmation",
    "Route",
    "RoutingOrchestrator",
    "RoutingResult",
    "RoutingTarget",
    "SessionPrerequisiteChecker",
    "SessionState",
    "ShowInlineResponse",
    "apply_guardrails",
    "build_destination",
    "normalize_input",
]
