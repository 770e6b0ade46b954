"""Request pipeline for one entity collection.

Reads go through the response cache; writes go to the repository and,
once they succeed, invalidate the whole cache before returning.
"""

from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncConnection

from storefront.protocols import EntityRepository

from .cache_service import CacheService

EntityT = TypeVar("EntityT")


class EntityService(Generic[EntityT]):
    """Cache-aware CRUD orchestration over an EntityRepository.

    The connection is acquired by the caller (once per request) and passed
    to every method. GET bodies are rendered by the caller-supplied
    ``render`` callable so the cache stores exactly the bytes sent to the
    client.
    """

    def __init__(self, repository: EntityRepository[EntityT], cache: CacheService) -> None:
        """Initialize the entity service.

        Args:
            repository: Data access for the collection (required).
            cache: Shared response cache (required).
        """
        self._repository = repository
        self._cache = cache

    async def list_cached(
        self,
        conn: AsyncConnection,
        key: str,
        render: Callable[[list[EntityT]], bytes],
    ) -> tuple[bytes, bool]:
        """Return the serialized collection, from cache when possible.

        Args:
            conn: Request-scoped connection
            key: Cache key (request path + query string)
            render: Serializes the entities into the response body

        Returns:
            Tuple (body, cache_hit)
        """
        cached = self._cache.get(key)
        if cached is not None:
            return cached, True

        generation = self._cache.generation
        body = render(await self._repository.list_all(conn))
        self._cache.set(key, body, generation=generation)
        return body, False

    async def get_cached(
        self,
        conn: AsyncConnection,
        key: str,
        entity_id: int,
        render: Callable[[EntityT], bytes],
    ) -> tuple[bytes, bool]:
        """Return one serialized entity, from cache when possible.

        Raises:
            NotFoundError: If no row has this id (nothing is cached)
        """
        cached = self._cache.get(key)
        if cached is not None:
            return cached, True

        generation = self._cache.generation
        body = render(await self._repository.get_by_id(conn, entity_id))
        self._cache.set(key, body, generation=generation)
        return body, False

    async def create(self, conn: AsyncConnection, fields: Mapping[str, Any]) -> int:
        """Insert a row, then invalidate the cache.

        Returns:
            The generated id
        """
        new_id = await self._repository.create(conn, fields)
        self._cache.invalidate_all()
        return new_id

    async def replace(self, conn: AsyncConnection, entity_id: int, fields: Mapping[str, Any]) -> None:
        await self._repository.replace(conn, entity_id, fields)
        self._cache.invalidate_all()

    async def delete(self, conn: AsyncConnection, entity_id: int) -> None:
        await self._repository.delete(conn, entity_id)
        self._cache.invalidate_all()

    @property
    def repository(self) -> EntityRepository[EntityT]:
        """Get the underlying repository (for testing)."""
        return self._repository
