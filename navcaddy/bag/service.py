from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Iterable, List

from pydantic import ValidationError

from ..config import get_settings
from ..repositories import BagRepository
from .defaults import build_default_bag
from .models import BagProfile, Club, StoredBag

logger = logging.getLogger(__name__)


class FileBagRepository(BagRepository):
    """Bag profiles stored as one JSON file per bag."""

    def __init__(self, base_dir: str | Path | None = None) -> None:
        base = Path(base_dir or get_settings().bags_dir).expanduser()
        self._base_dir = base.resolve()

    def _bag_path(self, bag_id: str) -> Path:
        safe = bag_id.replace("/", "_")
        return self._base_dir / f"{safe}.json"

    def _load(self, path: Path) -> StoredBag | None:
        try:
            return StoredBag.model_validate_json(path.read_text())
        except (OSError, ValidationError) as exc:
            logger.warning("bag_load_failed", extra={"path": str(path), "error": str(exc)})
            return None

    def _iter_bags(self) -> Iterable[StoredBag]:
        if not self._base_dir.exists():
            return
        for path in sorted(self._base_dir.glob("*.json")):
            stored = self._load(path)
            if stored is not None:
                yield stored

    def save_bag(self, profile: BagProfile, clubs: List[Club]) -> None:
        self._base_dir.mkdir(parents=True, exist_ok=True)
        stored = StoredBag(profile=profile, clubs=clubs)
        payload = stored.model_dump(mode="json", by_alias=True)
        self._bag_path(profile.id).write_text(
            json.dumps(payload, indent=2, sort_keys=True)
        )

    def create_default_bag(self, bag_id: str) -> BagProfile:
        profile, clubs = build_default_bag(bag_id)
        self.save_bag(profile, clubs)
        return profile

    def _active_bag(self) -> BagProfile | None:
        for stored in self._iter_bags():
            if stored.profile.is_active:
                return stored.profile
        return None

    def _clubs_for_bag(self, bag_id: str) -> List[Club]:
        path = self._bag_path(bag_id)
        if not path.exists():
            return []
        stored = self._load(path)
        return list(stored.clubs) if stored is not None else []

    # Blocking file reads run in a worker thread.
    async def get_active_bag(self) -> BagProfile | None:
        return await asyncio.to_thread(self._active_bag)

    async def get_clubs_for_bag(self, bag_id: str) -> List[Club]:
        return await asyncio.to_thread(self._clubs_for_bag, bag_id)


__all__ = ["FileBagRepository"]
