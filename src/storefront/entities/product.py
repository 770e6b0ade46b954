"""Product domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductEntity:
    """A row of the ``produtos`` table.

    Attributes:
        id: Server-generated identifier
        nome: Product name
        preco: Unit price
    """

    id: int
    nome: str
    preco: float
