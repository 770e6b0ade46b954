"""Customer domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CustomerEntity:
    """A row of the ``clientes`` table."""

    id: int
    nome: str
    sobrenome: str
    email: str
    idade: int
