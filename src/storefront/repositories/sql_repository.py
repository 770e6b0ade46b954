"""Shared CRUD implementation for single-table repositories.

Statements are built with SQLAlchemy Core, so every caller-supplied value
travels as a bound parameter and never as SQL text.
"""

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Generic, TypeVar

import structlog
from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.engine import CursorResult, RowMapping
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection
from sqlalchemy.sql import Executable

from storefront.exceptions import NotFoundError, TransportError, ValidationError

logger = structlog.get_logger(__name__)

EntityT = TypeVar("EntityT")


class SqlEntityRepository(Generic[EntityT]):
    """Base repository for one table with an integer ``id`` primary key.

    Subclasses set the table, the writable columns and the user-facing
    messages, and convert rows to entities.
    """

    table: ClassVar[Table]
    fields: ClassVar[Sequence[str]]
    not_found_message: ClassVar[str]
    required_message: ClassVar[str]

    def _to_entity(self, row: RowMapping) -> EntityT:
        raise NotImplementedError

    def validate(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Check that every writable column has a value.

        A value counts as missing when absent, None, empty or zero.

        Args:
            fields: Caller-supplied column values

        Returns:
            The writable columns, in declaration order

        Raises:
            ValidationError: If any column is missing
        """
        values = {name: fields.get(name) for name in self.fields}
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise ValidationError(self.required_message, detail={"missing": missing})
        return values

    async def list_all(self, conn: AsyncConnection) -> list[EntityT]:
        result = await self._execute(conn, select(self.table).order_by(self.table.c.id))
        return [self._to_entity(row) for row in result.mappings()]

    async def get_by_id(self, conn: AsyncConnection, entity_id: int) -> EntityT:
        result = await self._execute(conn, select(self.table).where(self.table.c.id == entity_id))
        row = result.mappings().first()
        if row is None:
            raise NotFoundError(self.not_found_message, detail={"id": entity_id})
        return self._to_entity(row)

    async def create(self, conn: AsyncConnection, fields: Mapping[str, Any]) -> int:
        values = self.validate(fields)
        result = await self._execute(conn, insert(self.table).values(**values), commit=True)
        new_id = result.inserted_primary_key[0]
        logger.info("Row inserted", table=self.table.name, id=new_id)
        return new_id

    async def replace(self, conn: AsyncConnection, entity_id: int, fields: Mapping[str, Any]) -> None:
        values = self.validate(fields)
        statement = update(self.table).where(self.table.c.id == entity_id).values(**values)
        result = await self._execute(conn, statement, commit=True)
        if result.rowcount == 0:
            raise NotFoundError(self.not_found_message, detail={"id": entity_id})
        logger.info("Row updated", table=self.table.name, id=entity_id)

    async def delete(self, conn: AsyncConnection, entity_id: int) -> None:
        statement = delete(self.table).where(self.table.c.id == entity_id)
        result = await self._execute(conn, statement, commit=True)
        if result.rowcount == 0:
            raise NotFoundError(self.not_found_message, detail={"id": entity_id})
        logger.info("Row deleted", table=self.table.name, id=entity_id)

    async def _execute(
        self,
        conn: AsyncConnection,
        statement: Executable,
        commit: bool = False,
    ) -> CursorResult:
        """Run one statement, wrapping driver failures in TransportError.

        Mutations that match no row are left uncommitted; the connection
        rolls them back on close.
        """
        try:
            result = await conn.execute(statement)
            if commit and result.rowcount != 0:
                await conn.commit()
            return result
        except SQLAlchemyError as e:
            logger.error("Statement failed", table=self.table.name, error=str(e))
            raise TransportError(str(e), detail=type(e).__name__) from e
