"""Entity repository protocol."""

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncConnection

EntityT = TypeVar("EntityT", covariant=True)


@runtime_checkable
class EntityRepository(Protocol[EntityT]):
    """CRUD access to one table over a caller-supplied connection.

    The connection is always passed explicitly; repositories hold no
    per-request state.
    """

    async def list_all(self, conn: AsyncConnection) -> list[EntityT]:
        """Return every row."""
        ...

    async def get_by_id(self, conn: AsyncConnection, entity_id: int) -> EntityT:
        """Return one row.

        Raises:
            NotFoundError: If no row has this id
        """
        ...

    async def create(self, conn: AsyncConnection, fields: Mapping[str, Any]) -> int:
        """Insert a row and return its generated id.

        Raises:
            ValidationError: If a required field is missing
        """
        ...

    async def replace(self, conn: AsyncConnection, entity_id: int, fields: Mapping[str, Any]) -> None:
        """Overwrite every field of a row.

        Raises:
            ValidationError: If a required field is missing
            NotFoundError: If no row has this id
        """
        ...

    async def delete(self, conn: AsyncConnection, entity_id: int) -> None:
        """Delete a row.

        Raises:
            NotFoundError: If no row has this id
        """
        ...
