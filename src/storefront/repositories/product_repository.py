"""Repository for the ``produtos`` table."""

from sqlalchemy.engine import RowMapping

from storefront.entities import ProductEntity

from .sql_repository import SqlEntityRepository
from .tables import produtos


class ProductRepository(SqlEntityRepository[ProductEntity]):
    """CRUD over ``produtos``.

    This class satisfies the EntityRepository protocol.
    """

    table = produtos
    fields = ("nome", "preco")
    not_found_message = "Produto não encontrado"
    required_message = "Nome e preço são obrigatórios."

    def _to_entity(self, row: RowMapping) -> ProductEntity:
        return ProductEntity(id=row["id"], nome=row["nome"], preco=row["preco"])
