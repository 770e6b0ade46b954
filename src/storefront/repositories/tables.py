"""Table definitions for the ``produtos`` and ``clientes`` tables."""

from sqlalchemy import Column, Double, Integer, MetaData, String, Table

metadata = MetaData()

produtos = Table(
    "produtos",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("nome", String(255), nullable=False),
    Column("preco", Double, nullable=False),
)

clientes = Table(
    "clientes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("nome", String(255), nullable=False),
    Column("sobrenome", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("idade", Integer, nullable=False),
)
