from .defaults import DEFAULT_CARRY_TABLE_M, build_default_bag
from .models import BagProfile, Club, ClubType

__all__ = [
    "DEFAULT_CARRY_TABLE_M",
    "build_default_bag",
    "BagProfile",
    "Club",
    "ClubType",
]
