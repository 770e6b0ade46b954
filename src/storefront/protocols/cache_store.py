"""Cache storage protocol.

Defines the interface for any key/value backend that can hold serialized
GET responses for a fixed time-to-live.

Implementations:
- In-process dictionary (default)
- Redis
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for response cache backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed. Entries are only ever removed all at
    once. Backends that can fail raise CacheUnavailableError from
    get, set, clear_all and count_all.
    """

    def get(self, key: str) -> bytes | None:
        """Return the stored value, or None when absent or expired.

        Args:
            key: Request path including query string
        """
        ...

    def set(self, key: str, value: bytes, ttl: int) -> None:
        """Store a value; overwriting a key restarts its expiry.

        Args:
            key: Request path including query string
            value: Serialized response body
            ttl: Time-to-live in seconds
        """
        ...

    def clear_all(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        ...

    def count_all(self) -> int:
        """Count live entries."""
        ...

    def health_check(self) -> bool:
        """Check if the backend is reachable."""
        ...

    def get_stats(self) -> dict:
        """Get backend statistics (implementation-specific)."""
        ...
