"""In-process implementation of CacheStore.

Entries live in a plain dict. Expired entries are dropped when they are
read, and every write sweeps the whole dict so unread keys cannot pile up.
"""

import time
from collections.abc import Callable

from storefront.entities import CacheEntryEntity


class InMemoryCacheRepository:
    """Dictionary-backed response cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        store = InMemoryCacheRepository.create()
        store.set("/produtos", b"[]", ttl=100)
        store.get("/produtos")  # b"[]"
        ```
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        """Initialize the in-memory cache.

        Args:
            clock: Returns the current time in seconds. Defaults to time.monotonic.
        """
        self._entries: dict[str, CacheEntryEntity] = {}
        self._clock = clock or time.monotonic

    @classmethod
    def create(cls, clock: Callable[[], float] | None = None) -> "InMemoryCacheRepository":
        """Factory method to create an empty in-memory cache."""
        return cls(clock=clock)

    def get(self, key: str) -> bytes | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: bytes, ttl: int) -> None:
        now = self._clock()
        self._purge_expired(now)
        self._entries[key] = CacheEntryEntity(
            key=key,
            value=value,
            inserted_at=now,
            ttl=ttl,
        )

    def clear_all(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def count_all(self) -> int:
        self._purge_expired(self._clock())
        return len(self._entries)

    def _purge_expired(self, now: float) -> None:
        for key in [k for k, entry in self._entries.items() if entry.is_expired(now)]:
            del self._entries[key]

    def health_check(self) -> bool:
        return True

    def get_stats(self) -> dict:
        return {
            "backend": "memory",
            "total_entries": self.count_all(),
        }
