"""HTTP handlers for the product and customer collections.

Handlers convert between DTOs (API contracts) and service calls.
Domain errors are left to propagate; the API layer turns them into
error responses in one place.
"""

from typing import Any, Generic, TypeVar

from fastapi import Response
from pydantic import BaseModel, TypeAdapter
from sqlalchemy.ext.asyncio import AsyncConnection

from storefront.dto import (
    CustomerCreatedResponse,
    CustomerResponse,
    MessageResponse,
    ProductCreatedResponse,
    ProductResponse,
)
from storefront.entities import CustomerEntity, ProductEntity
from storefront.services import EntityService

EntityT = TypeVar("EntityT")
ItemT = TypeVar("ItemT", bound=BaseModel)

CACHE_HEADER = "X-Cache"


class EntityHandler(Generic[EntityT, ItemT]):
    """Shared GET/POST/PUT/DELETE handling for one collection.

    Subclasses provide the item DTO type, the entity → DTO conversion,
    the created-response builder and the confirmation messages.
    """

    item_type: type[ItemT]
    updated_message: str
    deleted_message: str

    def __init__(self, service: EntityService[EntityT]) -> None:
        """Initialize the handler.

        Args:
            service: The entity service for this collection (required).
        """
        self._service = service
        self._list_adapter = TypeAdapter(list[self.item_type])

    def to_item(self, entity: EntityT) -> ItemT:
        raise NotImplementedError

    def created_response(self, new_id: int, fields: dict[str, Any]) -> BaseModel:
        raise NotImplementedError

    def _render_list(self, entities: list[EntityT]) -> bytes:
        return self._list_adapter.dump_json([self.to_item(e) for e in entities])

    def _render_item(self, entity: EntityT) -> bytes:
        return self.to_item(entity).model_dump_json().encode()

    @staticmethod
    def _json(body: bytes, cache_hit: bool) -> Response:
        return Response(
            content=body,
            media_type="application/json",
            headers={CACHE_HEADER: "HIT" if cache_hit else "MISS"},
        )

    async def list_items(self, conn: AsyncConnection, cache_key: str) -> Response:
        """Handle GET on the collection."""
        body, hit = await self._service.list_cached(conn, cache_key, self._render_list)
        return self._json(body, hit)

    async def get_item(self, conn: AsyncConnection, cache_key: str, entity_id: int) -> Response:
        """Handle GET on a single item."""
        body, hit = await self._service.get_cached(conn, cache_key, entity_id, self._render_item)
        return self._json(body, hit)

    async def create(self, conn: AsyncConnection, fields: dict[str, Any]) -> BaseModel:
        """Handle POST on the collection.

        Returns:
            The created-response DTO echoing the submitted fields
        """
        new_id = await self._service.create(conn, fields)
        return self.created_response(new_id, fields)

    async def replace(self, conn: AsyncConnection, entity_id: int, fields: dict[str, Any]) -> MessageResponse:
        """Handle PUT on a single item."""
        await self._service.replace(conn, entity_id, fields)
        return MessageResponse(message=self.updated_message)

    async def delete(self, conn: AsyncConnection, entity_id: int) -> MessageResponse:
        """Handle DELETE on a single item."""
        await self._service.delete(conn, entity_id)
        return MessageResponse(message=self.deleted_message)


class ProductHandler(EntityHandler[ProductEntity, ProductResponse]):
    """Handlers for /produtos."""

    item_type = ProductResponse
    updated_message = "Produto atualizado com sucesso"
    deleted_message = "Produto excluído com sucesso"

    def to_item(self, entity: ProductEntity) -> ProductResponse:
        return ProductResponse(id=entity.id, nome=entity.nome, preco=entity.preco)

    def created_response(self, new_id: int, fields: dict[str, Any]) -> ProductCreatedResponse:
        return ProductCreatedResponse(id=new_id, **fields, message="Produto criado com sucesso")


class CustomerHandler(EntityHandler[CustomerEntity, CustomerResponse]):
    """Handlers for /clientes."""

    item_type = CustomerResponse
    updated_message = "Cliente atualizado com sucesso"
    deleted_message = "Cliente excluído com sucesso"

    def to_item(self, entity: CustomerEntity) -> CustomerResponse:
        return CustomerResponse(
            id=entity.id,
            nome=entity.nome,
            sobrenome=entity.sobrenome,
            email=entity.email,
            idade=entity.idade,
        )

    def created_response(self, new_id: int, fields: dict[str, Any]) -> CustomerCreatedResponse:
        return CustomerCreatedResponse(id=new_id, **fields, message="Cliente criado com sucesso")
