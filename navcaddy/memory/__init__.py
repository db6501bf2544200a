from .decay import PATTERN_HALF_LIFE_DAYS, decay, elapsed_days
from .models import Lie, MissDirection, MissPattern, PressureContext, Shot

__all__ = [
    "PATTERN_HALF_LIFE_DAYS",
    "decay",
    "elapsed_days",
    "Lie",
    "MissDirection",
    "MissPattern",
    "PressureContext",
    "Shot",
]
