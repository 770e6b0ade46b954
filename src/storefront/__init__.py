"""Storefront - CRUD API for products and customers with a response cache.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (CacheStore, ConnectionProvider, EntityRepository)
    - repositories: Data access implementations (SQLAlchemy, in-memory, Redis)
    - services: Read-through caching and invalidation
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from storefront.repositories import InMemoryCacheRepository
    from storefront.services import CacheService

    cache = CacheService.create(store=InMemoryCacheRepository.create(), ttl=100)
    ```

For HTTP API:
    ```python
    from storefront.api.app import app, create_app
    ```
"""

from storefront.config import get_settings, settings
from storefront.dto import CustomerRequest, ProductRequest
from storefront.entities import CacheEntryEntity, CustomerEntity, ProductEntity
from storefront.exceptions import (
    CacheUnavailableError,
    DatabaseConnectionError,
    NotFoundError,
    StorefrontError,
    TransportError,
    ValidationError,
)
from storefront.handlers import CustomerHandler, ProductHandler
from storefront.protocols import CacheStore, ConnectionProvider, EntityRepository
from storefront.repositories import (
    CustomerRepository,
    DatabaseConnectionProvider,
    InMemoryCacheRepository,
    ProductRepository,
    RedisCacheRepository,
)
from storefront.services import CacheService, EntityService

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Errors
    "StorefrontError",
    "ValidationError",
    "NotFoundError",
    "DatabaseConnectionError",
    "TransportError",
    "CacheUnavailableError",
    # Protocols (interfaces)
    "CacheStore",
    "ConnectionProvider",
    "EntityRepository",
    # Services (business logic)
    "CacheService",
    "EntityService",
    # Handlers (HTTP)
    "ProductHandler",
    "CustomerHandler",
    # Repositories (data access)
    "DatabaseConnectionProvider",
    "ProductRepository",
    "CustomerRepository",
    "InMemoryCacheRepository",
    "RedisCacheRepository",
    # Entities (domain models)
    "ProductEntity",
    "CustomerEntity",
    "CacheEntryEntity",
    # DTOs (API contracts)
    "ProductRequest",
    "CustomerRequest",
]
