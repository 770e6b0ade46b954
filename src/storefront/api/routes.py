"""Route definitions.

Collection routes take the request-scoped connection and delegate to the
handlers; operational routes (root, health, cache) do not open a
connection of their own except for the health probe.
"""

from typing import Any

from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse

from storefront.dto import (
    CacheStatsResponse,
    CustomerCreatedResponse,
    CustomerRequest,
    CustomerResponse,
    HealthCheckResponse,
    MessageResponse,
    ProductCreatedResponse,
    ProductRequest,
    ProductResponse,
)

from .dependencies import (
    CacheKeyDep,
    CacheServiceDep,
    ConnectionDep,
    ConnectionProviderDep,
    CustomerHandlerDep,
    ProductHandlerDep,
)

products_router = APIRouter(prefix="/produtos", tags=["produtos"])
customers_router = APIRouter(prefix="/clientes", tags=["clientes"])
system_router = APIRouter(tags=["system"])


@products_router.get("", response_model=list[ProductResponse])
async def list_products(conn: ConnectionDep, cache_key: CacheKeyDep, handler: ProductHandlerDep) -> Response:
    return await handler.list_items(conn, cache_key)


@products_router.post("", status_code=status.HTTP_201_CREATED, response_model=ProductCreatedResponse)
async def create_product(
    conn: ConnectionDep,
    handler: ProductHandlerDep,
    request: ProductRequest | None = None,
) -> Any:
    return await handler.create(conn, (request or ProductRequest()).to_fields())


@products_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    conn: ConnectionDep,
    cache_key: CacheKeyDep,
    handler: ProductHandlerDep,
) -> Response:
    return await handler.get_item(conn, cache_key, product_id)


@products_router.put("/{product_id}", response_model=MessageResponse)
async def replace_product(
    product_id: int,
    conn: ConnectionDep,
    handler: ProductHandlerDep,
    request: ProductRequest | None = None,
) -> MessageResponse:
    return await handler.replace(conn, product_id, (request or ProductRequest()).to_fields())


@products_router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: int, conn: ConnectionDep, handler: ProductHandlerDep) -> MessageResponse:
    return await handler.delete(conn, product_id)


@customers_router.get("", response_model=list[CustomerResponse])
async def list_customers(conn: ConnectionDep, cache_key: CacheKeyDep, handler: CustomerHandlerDep) -> Response:
    return await handler.list_items(conn, cache_key)


@customers_router.post("", status_code=status.HTTP_201_CREATED, response_model=CustomerCreatedResponse)
async def create_customer(
    conn: ConnectionDep,
    handler: CustomerHandlerDep,
    request: CustomerRequest | None = None,
) -> Any:
    return await handler.create(conn, (request or CustomerRequest()).to_fields())


@customers_router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int,
    conn: ConnectionDep,
    cache_key: CacheKeyDep,
    handler: CustomerHandlerDep,
) -> Response:
    return await handler.get_item(conn, cache_key, customer_id)


@customers_router.put("/{customer_id}", response_model=MessageResponse)
async def replace_customer(
    customer_id: int,
    conn: ConnectionDep,
    handler: CustomerHandlerDep,
    request: CustomerRequest | None = None,
) -> MessageResponse:
    return await handler.replace(conn, customer_id, (request or CustomerRequest()).to_fields())


@customers_router.delete("/{customer_id}", response_model=MessageResponse)
async def delete_customer(customer_id: int, conn: ConnectionDep, handler: CustomerHandlerDep) -> MessageResponse:
    return await handler.delete(conn, customer_id)


@system_router.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Storefront API",
        "version": "0.1.0",
        "description": "CRUD API for products and customers with a read-through response cache",
        "endpoints": {
            "produtos": "/produtos",
            "clientes": "/clientes",
            "cache": "/cache/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@system_router.get("/health", response_model=HealthCheckResponse)
async def health(provider: ConnectionProviderDep, cache: CacheServiceDep) -> Any:
    """Health check endpoint. Never cached.

    Returns 503 when either the database or the cache backend is unreachable.
    """
    database_healthy = await provider.health_check()
    cache_healthy = cache.is_healthy()
    body = HealthCheckResponse(
        status="healthy" if database_healthy and cache_healthy else "unhealthy",
        database_healthy=database_healthy,
        cache_healthy=cache_healthy,
    )
    if body.status != "healthy":
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body.model_dump())
    return body


@system_router.get("/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(cache: CacheServiceDep) -> CacheStatsResponse:
    """Get response cache statistics."""
    stats = cache.get_stats()
    return CacheStatsResponse(
        backend=stats["backend"],
        total_entries=stats["total_entries"],
        ttl_seconds=stats["ttl"],
        generation=stats["generation"],
        hits=stats["hits"],
        misses=stats["misses"],
        stale_writes_dropped=stats["stale_writes_dropped"],
        bypassed=stats["bypassed"],
    )


@system_router.delete("/cache", response_model=MessageResponse)
async def clear_cache(cache: CacheServiceDep) -> MessageResponse:
    """Manually invalidate every cached response."""
    removed = cache.invalidate_all()
    return MessageResponse(message=f"Cache limpo ({removed} entradas removidas)")
