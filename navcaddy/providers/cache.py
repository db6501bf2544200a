from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional


@dataclass
class CacheEntry:
    value: Any
    expires_at: float


class ProviderCache:
    """Thread-safe in-process TTL cache for provider responses."""

    def __init__(
        self,
        name: str,
        default_ttl: int,
        time_func: Callable[[], float] = time.time,
    ) -> None:
        self.name = name
        self._default_ttl = default_ttl
        self._time = time_func
        self._lock = threading.Lock()
        self._memory: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._memory.get(key)
            if not entry:
                return None
            if self._time() >= entry.expires_at:
                del self._memory[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> CacheEntry:
        ttl = self._default_ttl if ttl is None else ttl
        entry = CacheEntry(value=value, expires_at=self._time() + ttl)
        with self._lock:
            self._memory[key] = entry
        return entry

    def clear(self) -> None:
        with self._lock:
            self._memory.clear()


__all__ = ["CacheEntry", "ProviderCache"]
