"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .entity_handler import CustomerHandler, EntityHandler, ProductHandler

__all__ = [
    "EntityHandler",
    "ProductHandler",
    "CustomerHandler",
]
