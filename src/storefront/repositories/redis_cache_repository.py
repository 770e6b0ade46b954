"""Redis implementation of CacheStore.

Entries are plain string keys under a common prefix, written with
``SET ... EX`` so Redis expires them on its own. Full invalidation scans
the prefix and deletes every match.

Client failures are logged and re-raised as CacheUnavailableError; the
cache service decides how to degrade.
"""

import redis
import structlog

from storefront.config import Settings, get_redis_client, settings
from storefront.exceptions import CacheUnavailableError

logger = structlog.get_logger(__name__)


class RedisCacheRepository:
    """Redis-backed response cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key_prefix: Namespace for every key. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.cache_key_prefix

    @classmethod
    def create(cls, config: Settings | None = None) -> "RedisCacheRepository":
        """Factory method to create a repository from settings.

        Args:
            config: Settings with the Redis URL and key prefix. If None, uses global settings.

        Returns:
            Configured RedisCacheRepository
        """
        config = config or settings
        return cls(
            redis_client=get_redis_client(config),
            key_prefix=config.cache_key_prefix,
        )

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    def _unavailable(self, operation: str, error: redis.RedisError) -> CacheUnavailableError:
        logger.warning("Redis command failed", operation=operation, error=str(error))
        return CacheUnavailableError("Cache indisponível", detail={"operation": operation, "reason": str(error)})

    def get(self, key: str) -> bytes | None:
        try:
            value = self._client.get(self._key(key))
        except redis.RedisError as e:
            raise self._unavailable("get", e) from e
        return value  # type: ignore[return-value]

    def set(self, key: str, value: bytes, ttl: int) -> None:
        try:
            self._client.set(self._key(key), value, ex=ttl)
        except redis.RedisError as e:
            raise self._unavailable("set", e) from e

    def clear_all(self) -> int:
        try:
            keys = list(self._client.scan_iter(match=f"{self._prefix}:*"))
            if not keys:
                return 0
            count: int = self._client.delete(*keys)  # type: ignore[assignment]
        except redis.RedisError as e:
            raise self._unavailable("clear_all", e) from e
        return count

    def count_all(self) -> int:
        count = 0
        try:
            for _ in self._client.scan_iter(match=f"{self._prefix}:*"):
                count += 1
        except redis.RedisError as e:
            raise self._unavailable("count_all", e) from e
        return count

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            logger.warning("Redis ping failed", error=str(e))
            return False

    def get_stats(self) -> dict:
        return {
            "backend": "redis",
            "key_prefix": self._prefix,
            "total_entries": self.count_all(),
        }

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
