"""Protocol interfaces for swappable implementations.

Protocols enable:
- Easy swapping of implementations (in-memory cache → Redis, MySQL → SQLite)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .cache_store import CacheStore
from .connection_provider import ConnectionProvider
from .entity_repository import EntityRepository

__all__ = [
    "CacheStore",
    "ConnectionProvider",
    "EntityRepository",
]
