"""Database connection provider protocol."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncConnection


@runtime_checkable
class ConnectionProvider(Protocol):
    """Hands out one database connection per request.

    Example:
        ```python
        async with provider.acquire() as conn:
            products = await repository.list_all(conn)
        ```
    """

    def acquire(self) -> AbstractAsyncContextManager[AsyncConnection]:
        """Open a connection, closed again when the context exits.

        Raises:
            DatabaseConnectionError: If the database cannot be reached
        """
        ...

    async def health_check(self) -> bool:
        """Return True when a trivial statement succeeds."""
        ...

    async def create_schema(self) -> None:
        """Create missing tables."""
        ...

    async def dispose(self) -> None:
        """Release engine resources on shutdown."""
        ...
