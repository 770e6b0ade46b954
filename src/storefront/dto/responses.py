"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class ProductResponse(BaseModel):
    """A stored product."""

    id: int = Field(..., description="Server-generated identifier")
    nome: str
    preco: float


class ProductCreatedResponse(ProductResponse):
    """Response DTO for POST /produtos."""

    message: str


class CustomerResponse(BaseModel):
    """A stored customer."""

    id: int = Field(..., description="Server-generated identifier")
    nome: str
    sobrenome: str
    email: str
    idade: int


class CustomerCreatedResponse(CustomerResponse):
    """Response DTO for POST /clientes."""

    message: str


class MessageResponse(BaseModel):
    """Confirmation returned by PUT and DELETE."""

    message: str


class ErrorResponse(BaseModel):
    """Body of every error response.

    ``error`` is an empty object in production.
    """

    message: str
    error: dict[str, Any] = Field(default_factory=dict)


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    backend: str = Field(..., description="Cache backend in use: 'memory' or 'redis'")
    total_entries: int = Field(..., ge=0)
    ttl_seconds: int = Field(..., ge=0)
    generation: int = Field(..., ge=0, description="Number of full invalidations so far")
    hits: int = Field(..., ge=0)
    misses: int = Field(..., ge=0)
    stale_writes_dropped: int = Field(..., ge=0)
    bypassed: bool = Field(False, description="True while a failed invalidation keeps the cache out of use")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    database_healthy: bool
    cache_healthy: bool
