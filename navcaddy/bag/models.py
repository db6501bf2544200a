from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ClubType(str, Enum):
    DRIVER = "DRIVER"
    WOOD = "WOOD"
    HYBRID = "HYBRID"
    IRON = "IRON"
    WEDGE = "WEDGE"
    PUTTER = "PUTTER"


class Club(BaseModel):
    id: str
    name: str
    type: ClubType
    estimated_carry: int = Field(default=0, ge=0, alias="estimatedCarry")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class BagProfile(BaseModel):
    id: str
    name: str
    is_active: bool = Field(default=True, alias="isActive")
    created_at: datetime | None = Field(default=None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class StoredBag(BaseModel):
    """On-disk shape of a bag file."""

    profile: BagProfile
    clubs: list[Club]

    model_config = ConfigDict(populate_by_name=True)


__all__ = ["ClubType", "Club", "BagProfile", "StoredBag"]
