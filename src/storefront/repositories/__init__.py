"""Repository layer for data access.

This layer hides external dependencies (the relational database, Redis)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations (in-memory cache → Redis)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from storefront.protocols import CacheStore, ConnectionProvider, EntityRepository

from .customer_repository import CustomerRepository
from .database import DatabaseConnectionProvider
from .memory_cache_repository import InMemoryCacheRepository
from .product_repository import ProductRepository
from .redis_cache_repository import RedisCacheRepository
from .sql_repository import SqlEntityRepository

__all__ = [
    "CacheStore",
    "ConnectionProvider",
    "EntityRepository",
    "DatabaseConnectionProvider",
    "SqlEntityRepository",
    "ProductRepository",
    "CustomerRepository",
    "InMemoryCacheRepository",
    "RedisCacheRepository",
]
