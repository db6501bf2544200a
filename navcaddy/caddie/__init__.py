from .context import LiveCaddyContext, LiveCaddyContextService
from .models import (
    CourseHole,
    HazardLocation,
    HazardType,
    HazardZone,
    HoleStrategy,
    LandingZone,
    PersonalizationContext,
    PinPosition,
)
from .pinseeker import PinSeekerEngine, compute_strategy

__all__ = [
    "CourseHole",
    "HazardLocation",
    "HazardType",
    "HazardZone",
    "HoleStrategy",
    "LandingZone",
    "LiveCaddyContext",
    "LiveCaddyContextService",
    "PersonalizationContext",
    "PinPosition",
    "PinSeekerEngine",
    "compute_strategy",
]
