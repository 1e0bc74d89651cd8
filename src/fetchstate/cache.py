"""Per-instance result cache with lazy expiry."""

import time
from collections import OrderedDict
from typing import Any

from fetchstate.types import CacheEntry, Clock


class ResultCache:
    """In-memory table of results keyed by cache key.

    Entries older than ``duration`` milliseconds are treated as absent and
    dropped when next looked up. Nothing sweeps the table in the background.
    """

    def __init__(
        self,
        duration: float,
        clock: Clock,
        max_items: int | None = None,
    ) -> None:
        self._entries: OrderedDict[str, CacheEntry[Any]] = OrderedDict()
        self._duration = duration
        self._clock = clock
        self._max_items = max_items

    @property
    def duration(self) -> float:
        return self._duration

    @duration.setter
    def duration(self, duration: float) -> None:
        self._duration = duration

    @property
    def max_items(self) -> int | None:
        return self._max_items

    @max_items.setter
    def max_items(self, max_items: int | None) -> None:
        self._max_items = max_items
        self._evict_overflow()

    def _evict_overflow(self) -> None:
        while self._max_items and len(self._entries) > self._max_items:
            self._entries.popitem(last=False)

    def _is_expired(self, entry: CacheEntry[Any]) -> bool:
        """Check if entry has outlived the cache duration."""
        return self._clock() - entry.stored_at > self._duration

    def lookup(self, key: str | None) -> CacheEntry[Any] | None:
        """Get a live entry, evicting it first if it has expired."""
        if key is None:
            return None
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry):
            del self._entries[key]
            return None
        self._entries.move_to_end(key)  # LRU touch
        return entry

    def store(self, key: str | None, value: Any) -> None:
        """Store a value stamped with the current clock time."""
        if key is None:
            return
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock())
        self._entries.move_to_end(key)
        self._evict_overflow()

    def delete(self, key: str | None) -> None:
        """Delete an entry."""
        if key is not None:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Clear all entries."""
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000
