"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable with fakes.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Cache + orchestration) -> (Data Access)
"""

from .cache_service import CacheService
from .entity_service import EntityService

__all__ = [
    "CacheService",
    "EntityService",
]
