"""Cache interface injected into the on-court collaborator."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple
import threading
import time


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    stored_at: float

    def age(self, now: float) -> float:
        return now - self.stored_at


class CacheStore:
    def get(self, key: str) -> Optional[Any]:
        entry = self.get_entry(key)
        return entry.value if entry is not None else None

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        raise NotImplementedError

    def invalidate(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class MemoryCache(CacheStore):
    """Thread-safe in-process cache; entries expire ``ttl_seconds`` after set()."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._data: Dict[str, Tuple[CacheEntry, float]] = {}
        self._lock = threading.Lock()

    def now(self) -> float:
        return self._clock()

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            item = self._data.get(key)
            if not item:
                return None
            entry, expires_at = item
            if self._clock() >= expires_at:
                self._data.pop(key, None)
                return None
            return entry

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        now = self._clock()
        with self._lock:
            self._data[key] = (CacheEntry(value=value, stored_at=now), now + ttl_seconds)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
