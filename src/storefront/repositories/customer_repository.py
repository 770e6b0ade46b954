"""Repository for the ``clientes`` table."""

from sqlalchemy.engine import RowMapping

from storefront.entities import CustomerEntity

from .sql_repository import SqlEntityRepository
from .tables import clientes


class CustomerRepository(SqlEntityRepository[CustomerEntity]):
    """CRUD over ``clientes``."""

    table = clientes
    fields = ("nome", "sobrenome", "email", "idade")
    not_found_message = "Cliente não encontrado"
    required_message = "Nome, sobrenome, email e idade são obrigatórios."

    def _to_entity(self, row: RowMapping) -> CustomerEntity:
        return CustomerEntity(
            id=row["id"],
            nome=row["nome"],
            sobrenome=row["sobrenome"],
            email=row["email"],
            idade=row["idade"],
        )
