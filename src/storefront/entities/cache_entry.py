"""Cache entry domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntryEntity:
    """A serialized GET response held by the in-memory cache.

    Attributes:
        key: Request path including the raw query string
        value: Serialized response body
        inserted_at: Clock reading when the entry was stored
        ttl: Seconds the entry stays valid after ``inserted_at``
    """

    key: str
    value: bytes
    inserted_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        """Entries expire a fixed time after insertion, regardless of reads."""
        return now - self.inserted_at >= self.ttl
