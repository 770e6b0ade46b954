"""SQLAlchemy implementation of ConnectionProvider.

Every request opens its own connection and closes it when the request
finishes. The engine uses ``NullPool`` so nothing is kept between
requests.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy import text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from storefront.config import Settings, settings
from storefront.exceptions import DatabaseConnectionError

from .tables import metadata

logger = structlog.get_logger(__name__)

CONNECTION_ERROR_MESSAGE = "Erro ao conectar ao banco de dados"


class DatabaseConnectionProvider:
    """Opens one ``AsyncConnection`` per call to ``acquire``.

    This class satisfies the ConnectionProvider protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        """Initialize the provider.

        Args:
            engine: Async engine configured with static connection parameters.
        """
        self._engine = engine

    @classmethod
    def create(
        cls,
        database_url: str | URL | None = None,
        config: Settings | None = None,
    ) -> "DatabaseConnectionProvider":
        """Factory method to create a provider with a non-pooling engine.

        Args:
            database_url: Explicit database URL. If None, uses settings.
            config: Settings to read the URL from. If None, uses global settings.

        Returns:
            Configured DatabaseConnectionProvider
        """
        url = database_url or (config or settings).database_url
        engine = create_async_engine(url, poolclass=NullPool)
        return cls(engine)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[AsyncConnection]:
        """Open a connection for the duration of the context.

        Raises:
            DatabaseConnectionError: If the connection cannot be established
        """
        try:
            conn = await self._engine.connect()
        except (SQLAlchemyError, OSError) as e:
            logger.error(CONNECTION_ERROR_MESSAGE, error=str(e))
            raise DatabaseConnectionError(CONNECTION_ERROR_MESSAGE, detail=str(e)) from e

        try:
            yield conn
        finally:
            await conn.close()

    async def health_check(self) -> bool:
        """Check if the database answers a trivial query.

        Returns:
            True if healthy, False otherwise
        """
        try:
            async with self.acquire() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (DatabaseConnectionError, SQLAlchemyError):
            return False

    async def create_schema(self) -> None:
        """Create the ``produtos`` and ``clientes`` tables if missing."""
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            logger.error(CONNECTION_ERROR_MESSAGE, error=str(e))
            raise DatabaseConnectionError(CONNECTION_ERROR_MESSAGE, detail=str(e)) from e
        logger.info("Database schema ready", tables=sorted(metadata.tables))

    async def dispose(self) -> None:
        """Dispose of the engine."""
        await self._engine.dispose()

    @property
    def engine(self) -> AsyncEngine:
        """Get the underlying engine (for testing)."""
        return self._engine
