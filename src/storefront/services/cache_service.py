"""Response cache service.

Wraps a CacheStore with the fixed TTL, hit/miss accounting and an
invalidation generation counter. A GET that misses remembers the
generation before it reads the database; if a write invalidates the
cache in the meantime, the late populate is dropped instead of storing
pre-mutation data.

An unreachable backend never fails a request: a failed read is a miss
and a failed populate is dropped. A failed invalidation switches the
service into bypass mode, where every read misses and nothing is stored,
until a later clear succeeds.
"""

import structlog

from storefront.config import settings
from storefront.exceptions import CacheUnavailableError
from storefront.protocols import CacheStore

logger = structlog.get_logger(__name__)


class CacheService:
    """Read-through response cache with full invalidation.

    Example:
        ```python
        from storefront.repositories import InMemoryCacheRepository
        from storefront.services import CacheService

        cache = CacheService.create(store=InMemoryCacheRepository.create(), ttl=100)

        generation = cache.generation
        body = cache.get("/produtos")
        if body is None:
            body = render(await repository.list_all(conn))
            cache.set("/produtos", body, generation=generation)

        # after any successful write
        cache.invalidate_all()
        ```
    """

    def __init__(self, store: CacheStore, ttl: int | None = None, backend: str = "memory") -> None:
        """Initialize the cache service.

        Args:
            store: Cache storage backend (required).
            ttl: Time-to-live for entries in seconds. Defaults to settings.
            backend: Backend name reported in statistics.
        """
        self._store = store
        self._ttl = ttl or settings.cache_ttl
        self._backend = backend
        self._generation = 0
        self._hits = 0
        self._misses = 0
        self._stale_writes = 0
        self._bypass = False

    @classmethod
    def create(cls, store: CacheStore, ttl: int | None = None, backend: str = "memory") -> "CacheService":
        """Factory method to create CacheService.

        Args:
            store: Cache storage backend (required).
            ttl: Entry TTL in seconds. If None, uses settings.
            backend: Backend name reported in statistics.

        Returns:
            Configured CacheService instance
        """
        return cls(store=store, ttl=ttl, backend=backend)

    def get(self, key: str) -> bytes | None:
        """Look up a cached response body.

        Args:
            key: Exact request path including query string

        Returns:
            The cached body, or None on a miss
        """
        value = None
        if not self._bypass or self._retry_clear():
            try:
                value = self._store.get(key)
            except CacheUnavailableError:
                value = None

        if value is None:
            self._misses += 1
            logger.debug("Cache miss", key=key)
        else:
            self._hits += 1
            logger.debug("Cache hit", key=key)
        return value

    def set(self, key: str, value: bytes, generation: int | None = None) -> bool:
        """Store a response body with the configured TTL.

        Args:
            key: Exact request path including query string
            value: Serialized response body
            generation: Generation observed before the data was read. When it
                no longer matches, the body predates an invalidation and is dropped.

        Returns:
            True if stored, False if dropped (stale, bypassed or backend down)
        """
        if generation is not None and generation != self._generation:
            self._stale_writes += 1
            logger.info(
                "Dropped stale cache populate",
                key=key,
                read_generation=generation,
                current_generation=self._generation,
            )
            return False
        if self._bypass:
            return False

        try:
            self._store.set(key, value, self._ttl)
        except CacheUnavailableError:
            return False
        return True

    def invalidate_all(self) -> int:
        """Clear every cached response.

        If the backend cannot be cleared the service bypasses the cache
        until a later clear succeeds, so no pre-invalidation entry is served.

        Returns:
            Number of entries removed (0 when the clear failed)
        """
        self._generation += 1
        try:
            count = self._store.clear_all()
        except CacheUnavailableError:
            self._bypass = True
            logger.error("Cache invalidation failed, bypassing cache", generation=self._generation)
            return 0

        self._bypass = False
        logger.info("Cache invalidated", removed=count, generation=self._generation)
        return count

    def _retry_clear(self) -> bool:
        try:
            count = self._store.clear_all()
        except CacheUnavailableError:
            return False
        self._bypass = False
        logger.info("Cache invalidation recovered", removed=count, generation=self._generation)
        return True

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        stats = self._store.get_stats()
        stats.setdefault("backend", self._backend)
        stats["ttl"] = self._ttl
        stats["generation"] = self._generation
        stats["hits"] = self._hits
        stats["misses"] = self._misses
        stats["stale_writes_dropped"] = self._stale_writes
        stats["bypassed"] = self._bypass
        return stats

    def is_healthy(self) -> bool:
        return self._store.health_check()

    @property
    def generation(self) -> int:
        """Number of full invalidations performed so far."""
        return self._generation

    @property
    def bypassed(self) -> bool:
        """True while a failed invalidation keeps the cache out of use."""
        return self._bypass

    @property
    def ttl(self) -> int:
        return self._ttl

    @property
    def store(self) -> CacheStore:
        """Get the underlying store (for testing)."""
        return self._store
