"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - One database connection per request via ``get_connection``
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

import structlog
from fastapi import Depends, FastAPI, Request
from sqlalchemy.ext.asyncio import AsyncConnection

from storefront.config import Settings
from storefront.handlers import CustomerHandler, ProductHandler
from storefront.protocols import CacheStore, ConnectionProvider
from storefront.repositories import (
    CustomerRepository,
    DatabaseConnectionProvider,
    InMemoryCacheRepository,
    ProductRepository,
    RedisCacheRepository,
)
from storefront.services import CacheService, EntityService

logger = structlog.get_logger(__name__)


def _from_state(request: Request, name: str) -> Any:
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized. Check lifespan setup.")
    return value


def get_app_settings(request: Request) -> Settings:
    """Dependency injection for the Settings the app was created with."""
    return _from_state(request, "settings")


def get_cache_service(request: Request) -> CacheService:
    """Dependency injection for CacheService from app.state.

    Raises:
        RuntimeError: If service is not initialized
    """
    return _from_state(request, "cache_service")


def get_connection_provider(request: Request) -> ConnectionProvider:
    """Dependency injection for the ConnectionProvider from app.state."""
    return _from_state(request, "connection_provider")


def get_product_handler(request: Request) -> ProductHandler:
    return _from_state(request, "product_handler")


def get_customer_handler(request: Request) -> CustomerHandler:
    return _from_state(request, "customer_handler")


async def get_connection(
    provider: Annotated[ConnectionProvider, Depends(get_connection_provider)],
) -> AsyncIterator[AsyncConnection]:
    """Open the request's database connection and close it afterwards.

    Raises:
        DatabaseConnectionError: If the database cannot be reached
    """
    async with provider.acquire() as conn:
        yield conn


def get_cache_key(request: Request) -> str:
    """Cache key: the exact request path plus the raw query string."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def build_cache_store(config: Settings) -> CacheStore:
    """Create the cache backend named by CACHE_BACKEND."""
    if config.cache_backend == "redis":
        return RedisCacheRepository.create(config)
    return InMemoryCacheRepository.create()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Connection provider and cache store - created from settings unless
       injected through ``create_app``
    2. Services - cache_service, product_service, customer_service
    3. Handlers - product_handler, customer_handler

    Cleanup:
        Disposes of the engine and removes the layers from app.state
    """
    config: Settings = app.state.settings
    overrides: dict[str, Any] = getattr(app.state, "overrides", {})

    connection_provider = overrides.get("connection_provider") or DatabaseConnectionProvider.create(
        config=config
    )
    if config.db_create_schema:
        await connection_provider.create_schema()

    store = overrides.get("cache_store") or build_cache_store(config)
    cache_service = CacheService.create(store=store, ttl=config.cache_ttl, backend=config.cache_backend)

    product_service = EntityService(ProductRepository(), cache_service)
    customer_service = EntityService(CustomerRepository(), cache_service)

    app.state.connection_provider = connection_provider
    app.state.cache_service = cache_service
    app.state.product_service = product_service
    app.state.customer_service = customer_service
    app.state.product_handler = ProductHandler(product_service)
    app.state.customer_handler = CustomerHandler(customer_service)

    logger.info(
        "Storefront API started",
        database=config.database_url.render_as_string(hide_password=True),
        cache_backend=config.cache_backend,
        cache_ttl=config.cache_ttl,
        production=config.is_production,
    )

    yield

    await connection_provider.dispose()
    del app.state.customer_handler
    del app.state.product_handler
    del app.state.customer_service
    del app.state.product_service
    del app.state.cache_service
    del app.state.connection_provider
    logger.info("Storefront API shut down")


# Type aliases for cleaner dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
CacheServiceDep = Annotated[CacheService, Depends(get_cache_service)]
ConnectionProviderDep = Annotated[ConnectionProvider, Depends(get_connection_provider)]
ConnectionDep = Annotated[AsyncConnection, Depends(get_connection)]
CacheKeyDep = Annotated[str, Depends(get_cache_key)]
ProductHandlerDep = Annotated[ProductHandler, Depends(get_product_handler)]
CustomerHandlerDep = Annotated[CustomerHandler, Depends(get_customer_handler)]
