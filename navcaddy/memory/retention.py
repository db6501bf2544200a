from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Tuple, TypeVar

T = TypeVar("T")

SHOT_RETENTION_DAYS = 90


def purge_expired(
    items: Iterable[T],
    now: datetime,
    retention_days: int,
    key: Callable[[T], datetime],
) -> Tuple[List[T], List[T]]:
    """Split ``items`` into ``(kept, expired)`` around the retention cutoff.

    ``retention_days <= 0`` expires everything.
    """

    kept: List[T] = []
    expired: List[T] = []
    cutoff = now - timedelta(days=max(0, retention_days))

    for item in items:
        if retention_days > 0 and key(item) >= cutoff:
            kept.append(item)
        else:
            expired.append(item)

    return kept, expired


__all__ = ["SHOT_RETENTION_DAYS", "purge_expired"]
