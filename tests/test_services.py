"""
Unit tests for EntityService with a fake repository.

No database is involved: the connection argument is an opaque sentinel
that the fake repository ignores.
"""

import json

import pytest

from storefront.entities import ProductEntity
from storefront.exceptions import NotFoundError, ValidationError
from storefront.repositories import InMemoryCacheRepository
from storefront.services import CacheService, EntityService

CONN = object()


class FakeProductRepository:
    """In-memory stand-in for ProductRepository that records calls."""

    def __init__(self) -> None:
        self.rows: dict[int, ProductEntity] = {}
        self.calls: list[str] = []
        self.during_read = None

    async def list_all(self, conn):
        self.calls.append("list_all")
        snapshot = sorted(self.rows.values(), key=lambda p: p.id)
        if self.during_read:
            self.during_read()
        return snapshot

    async def get_by_id(self, conn, entity_id):
        self.calls.append("get_by_id")
        if entity_id not in self.rows:
            raise NotFoundError("Produto não encontrado")
        return self.rows[entity_id]

    async def create(self, conn, fields):
        self.calls.append("create")
        if not fields.get("nome") or not fields.get("preco"):
            raise ValidationError("Nome e preço são obrigatórios.")
        new_id = len(self.rows) + 1
        self.rows[new_id] = ProductEntity(id=new_id, nome=fields["nome"], preco=fields["preco"])
        return new_id

    async def replace(self, conn, entity_id, fields):
        self.calls.append("replace")
        if entity_id not in self.rows:
            raise NotFoundError("Produto não encontrado")
        self.rows[entity_id] = ProductEntity(id=entity_id, nome=fields["nome"], preco=fields["preco"])

    async def delete(self, conn, entity_id):
        self.calls.append("delete")
        if self.rows.pop(entity_id, None) is None:
            raise NotFoundError("Produto não encontrado")


def render_list(products):
    return json.dumps([p.nome for p in products]).encode()


def render_item(product):
    return json.dumps(product.nome).encode()


@pytest.fixture
def repository():
    return FakeProductRepository()


@pytest.fixture
def cache(clock):
    return CacheService.create(store=InMemoryCacheRepository.create(clock=clock), ttl=100)


@pytest.fixture
def service(repository, cache):
    return EntityService(repository, cache)


class TestEntityService:
    """Test read-through caching and invalidation."""

    @pytest.mark.asyncio
    async def test_cache_hit_skips_repository(self, service, repository):
        body, hit = await service.list_cached(CONN, "/produtos", render_list)
        assert (body, hit) == (b"[]", False)

        body, hit = await service.list_cached(CONN, "/produtos", render_list)
        assert (body, hit) == (b"[]", True)
        assert repository.calls == ["list_all"]

    @pytest.mark.asyncio
    async def test_get_cached(self, service, repository):
        new_id = await service.create(CONN, {"nome": "Caneta", "preco": 2.5})

        await service.get_cached(CONN, f"/produtos/{new_id}", new_id, render_item)
        body, hit = await service.get_cached(CONN, f"/produtos/{new_id}", new_id, render_item)
        assert (body, hit) == (b'"Caneta"', True)
        assert repository.calls.count("get_by_id") == 1

    @pytest.mark.asyncio
    async def test_get_missing_raises_and_caches_nothing(self, service, cache):
        with pytest.raises(NotFoundError):
            await service.get_cached(CONN, "/produtos/1", 1, render_item)
        assert cache.store.count_all() == 0

    @pytest.mark.asyncio
    async def test_create_invalidates(self, service, cache):
        await service.list_cached(CONN, "/produtos", render_list)

        await service.create(CONN, {"nome": "Caneta", "preco": 2.5})

        assert cache.generation == 1
        body, hit = await service.list_cached(CONN, "/produtos", render_list)
        assert (body, hit) == (b'["Caneta"]', False)

    @pytest.mark.asyncio
    async def test_replace_invalidates(self, service, cache):
        new_id = await service.create(CONN, {"nome": "Caneta", "preco": 2.5})
        await service.list_cached(CONN, "/produtos", render_list)

        await service.replace(CONN, new_id, {"nome": "Lápis", "preco": 1.0})

        body, _ = await service.list_cached(CONN, "/produtos", render_list)
        assert body == b'["L\\u00e1pis"]'

    @pytest.mark.asyncio
    async def test_delete_invalidates(self, service, cache):
        new_id = await service.create(CONN, {"nome": "Caneta", "preco": 2.5})
        await service.list_cached(CONN, "/produtos", render_list)

        await service.delete(CONN, new_id)

        assert cache.generation == 2
        body, hit = await service.list_cached(CONN, "/produtos", render_list)
        assert (body, hit) == (b"[]", False)

    @pytest.mark.asyncio
    async def test_failed_writes_do_not_invalidate(self, service, cache):
        await service.list_cached(CONN, "/produtos", render_list)

        with pytest.raises(ValidationError):
            await service.create(CONN, {"nome": "Caneta"})
        with pytest.raises(NotFoundError):
            await service.replace(CONN, 42, {"nome": "Caneta", "preco": 1.0})
        with pytest.raises(NotFoundError):
            await service.delete(CONN, 42)

        assert cache.generation == 0
        _, hit = await service.list_cached(CONN, "/produtos", render_list)
        assert hit is True

    @pytest.mark.asyncio
    async def test_populate_racing_an_invalidation_is_dropped(self, service, repository, cache):
        await service.create(CONN, {"nome": "Caneta", "preco": 2.5})

        # A write lands while the GET is waiting on the database.
        def concurrent_write():
            repository.rows[1] = ProductEntity(id=1, nome="Alterado", preco=2.5)
            cache.invalidate_all()

        repository.during_read = concurrent_write
        body, hit = await service.list_cached(CONN, "/produtos", render_list)
        assert (body, hit) == (b'["Caneta"]', False)

        repository.during_read = None
        body, hit = await service.list_cached(CONN, "/produtos", render_list)
        assert (body, hit) == (b'["Alterado"]', False)
        assert cache.get_stats()["stale_writes_dropped"] == 1
