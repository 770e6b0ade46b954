"""Request DTOs for API endpoints.

Every field is optional at the schema level: presence of required fields
is checked by the repository so that a missing field produces the same
400 message whether it was omitted, null or empty.
"""

from typing import Any

from pydantic import BaseModel, Field


class ProductRequest(BaseModel):
    """Body of POST /produtos and PUT /produtos/{id}."""

    nome: str | None = Field(None, description="Product name")
    preco: float | None = Field(None, description="Unit price")

    def to_fields(self) -> dict[str, Any]:
        return self.model_dump()


class CustomerRequest(BaseModel):
    """Body of POST /clientes and PUT /clientes/{id}."""

    nome: str | None = Field(None, description="First name")
    sobrenome: str | None = Field(None, description="Last name")
    email: str | None = Field(None, description="Contact e-mail")
    idade: int | None = Field(None, description="Age in years")

    def to_fields(self) -> dict[str, Any]:
        return self.model_dump()
