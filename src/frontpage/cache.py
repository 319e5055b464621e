"""In-memory time-boxed cache shared by the feed, description and suggestion lookups."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ENTRIES = 100


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value and the clock reading at which it was stored."""

    value: T
    stored_at: float


class TTLCache(Generic[T]):
    """Key -> value memo whose entries expire ``ttl`` seconds after being set.

    Expired entries are treated as absent and dropped on the next ``get``.
    Once more than ``max_entries`` keys are held, the oldest-inserted keys are
    evicted first. Overwriting a key does not move it in the eviction order.
    """

    def __init__(
        self,
        ttl: float,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
        name: str = "cache",
    ):
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl = ttl
        self.max_entries = max_entries
        self.name = name
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}

    def get(self, key: str) -> Optional[T]:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("%s miss: %s", self.name, key)
            return None
        if self._clock() - entry.stored_at >= self.ttl:
            del self._entries[key]
            logger.debug("%s expired: %s", self.name, key)
            return None
        logger.debug("%s hit: %s", self.name, key)
        return entry.value

    def set(self, key: str, value: T) -> None:
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock())
        while len(self._entries) > self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug("%s evicted: %s", self.name, oldest)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Any) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock() - entry.stored_at < self.ttl

    def __len__(self) -> int:
        return len(self._entries)
