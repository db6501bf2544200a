from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Tuple

from .models import BagProfile, Club, ClubType

DEFAULT_CARRY_TABLE_M = {
    "driver": 230,
    "3w": 215,
    "5w": 205,
    "4h": 195,
    "5i": 180,
    "6i": 170,
    "7i": 160,
    "8i": 150,
    "9i": 140,
    "pw": 125,
    "gw": 110,
    "sw": 95,
    "lw": 80,
    "putter": 0,
}


def _default_clubs() -> List[Club]:
    template = [
        ("driver", "Driver", ClubType.DRIVER),
        ("3w", "3-wood", ClubType.WOOD),
        ("5w", "5-wood", ClubType.WOOD),
        ("4h", "4-hybrid", ClubType.HYBRID),
        ("5i", "5-iron", ClubType.IRON),
        ("6i", "6-iron", ClubType.IRON),
        ("7i", "7-iron", ClubType.IRON),
        ("8i", "8-iron", ClubType.IRON),
        ("9i", "9-iron", ClubType.IRON),
        ("pw", "Pitching Wedge", ClubType.WEDGE),
        ("gw", "Gap Wedge", ClubType.WEDGE),
        ("sw", "Sand Wedge", ClubType.WEDGE),
        ("lw", "Lob Wedge", ClubType.WEDGE),
        ("putter", "Putter", ClubType.PUTTER),
    ]

    return [
        Club(
            id=club_id,
            name=name,
            type=club_type,
            estimated_carry=DEFAULT_CARRY_TABLE_M[club_id],
        )
        for club_id, name, club_type in template
    ]


def build_default_bag(bag_id: str, name: str = "My Bag") -> Tuple[BagProfile, List[Club]]:
    profile = BagProfile(
        id=bag_id,
        name=name,
        is_active=True,
        created_at=datetime.now(timezone.utc),
    )
    return profile, _default_clubs()


__all__ = ["DEFAULT_CARRY_TABLE_M", "build_default_bag"]
