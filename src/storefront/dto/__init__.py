"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import CustomerRequest, ProductRequest
from .responses import (
    CacheStatsResponse,
    CustomerCreatedResponse,
    CustomerResponse,
    ErrorResponse,
    HealthCheckResponse,
    MessageResponse,
    ProductCreatedResponse,
    ProductResponse,
)

__all__ = [
    "ProductRequest",
    "CustomerRequest",
    "ProductResponse",
    "ProductCreatedResponse",
    "CustomerResponse",
    "CustomerCreatedResponse",
    "MessageResponse",
    "ErrorResponse",
    "CacheStatsResponse",
    "HealthCheckResponse",
]
