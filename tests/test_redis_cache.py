"""
End-to-end tests for the response cache on the Redis backend.

The client is a ``MagicMock(spec=redis.Redis)`` whose commands read and
write a plain dict; flipping ``down`` makes every command raise the way a
lost connection does.
"""

from fnmatch import fnmatch
from unittest.mock import MagicMock

import pytest
import redis
from fastapi.testclient import TestClient

from storefront.api.app import create_app
from storefront.repositories import RedisCacheRepository


class RedisDouble:
    """Dict-backed command behaviour for a mocked Redis client."""

    def __init__(self) -> None:
        self.data: dict[str, bytes] = {}
        self.down = False
        self.client = MagicMock(spec=redis.Redis)
        self.client.get.side_effect = self._guard(self.data.get)
        self.client.set.side_effect = self._guard(self._set)
        self.client.scan_iter.side_effect = self._guard(self._scan_iter)
        self.client.delete.side_effect = self._guard(self._delete)
        self.client.ping.side_effect = self._guard(lambda: True)

    def _guard(self, command):
        def call(*args, **kwargs):
            if self.down:
                raise redis.ConnectionError("Error 111 connecting to localhost:6379. Connection refused.")
            return command(*args, **kwargs)

        return call

    def _set(self, key, value, ex=None):
        self.data[key] = value
        return True

    def _scan_iter(self, match):
        return iter([key for key in list(self.data) if fnmatch(key, match)])

    def _delete(self, *keys):
        return sum(self.data.pop(key, None) is not None for key in keys)


@pytest.fixture
def redis_double():
    return RedisDouble()


@pytest.fixture
def client(settings, redis_double):
    store = RedisCacheRepository(redis_client=redis_double.client, key_prefix="test")
    with TestClient(create_app(settings, cache_store=store)) as test_client:
        yield test_client


def names(response):
    return [item["nome"] for item in response.json()]


def test_get_miss_then_hit(client, redis_double):
    client.post("/produtos", json={"nome": "Caneta", "preco": 2.5})

    first = client.get("/produtos")
    assert first.headers["X-Cache"] == "MISS"
    assert "test:/produtos" in redis_double.data

    second = client.get("/produtos")
    assert second.headers["X-Cache"] == "HIT"
    assert names(second) == ["Caneta"]


def test_write_clears_redis_entries(client, redis_double, raw_db):
    client.post("/produtos", json={"nome": "Caneta", "preco": 2.5})
    client.get("/produtos")
    client.get("/produtos?ordem=nome")

    raw_db.execute("UPDATE produtos SET nome = 'Alterado'")
    raw_db.commit()
    client.post("/produtos", json={"nome": "Lápis", "preco": 1.0})

    assert redis_double.data == {}
    response = client.get("/produtos")
    assert response.headers["X-Cache"] == "MISS"
    assert names(response) == ["Alterado", "Lápis"]


def test_get_during_outage_reads_database(client, redis_double):
    client.post("/produtos", json={"nome": "Caneta", "preco": 2.5})
    redis_double.down = True

    for _ in range(2):
        response = client.get("/produtos")
        assert response.status_code == 200
        assert response.headers["X-Cache"] == "MISS"
        assert names(response) == ["Caneta"]


def test_write_during_outage_succeeds_and_never_serves_stale_data(client, redis_double, raw_db):
    client.post("/produtos", json={"nome": "Caneta", "preco": 2.5})
    assert client.get("/produtos").headers["X-Cache"] == "MISS"

    redis_double.down = True
    response = client.post("/produtos", json={"nome": "Lápis", "preco": 1.0})
    assert response.status_code == 201
    assert raw_db.execute("SELECT COUNT(*) FROM produtos").fetchone()[0] == 2

    # The pre-write entry survived in Redis, so the cache stays out of use.
    redis_double.down = False
    assert "test:/produtos" in redis_double.data
    assert client.get("/cache/stats").json()["bypassed"] is True

    response = client.get("/produtos")
    assert response.headers["X-Cache"] == "MISS"
    assert names(response) == ["Caneta", "Lápis"]

    assert client.get("/cache/stats").json()["bypassed"] is False
    again = client.get("/produtos")
    assert again.headers["X-Cache"] == "HIT"
    assert names(again) == ["Caneta", "Lápis"]


def test_delete_during_outage_succeeds(client, redis_double):
    created = client.post("/clientes", json={"nome": "Ana", "sobrenome": "Silva", "email": "a@x.com", "idade": 30})
    customer_id = created.json()["id"]
    client.get(f"/clientes/{customer_id}")

    redis_double.down = True
    assert client.delete(f"/clientes/{customer_id}").status_code == 200
    redis_double.down = False

    response = client.get(f"/clientes/{customer_id}")
    assert response.status_code == 404
    assert response.json()["message"] == "Cliente não encontrado"


def test_health_reports_cache_outage(client, redis_double):
    redis_double.down = True

    response = client.get("/health")
    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "database_healthy": True, "cache_healthy": False}


def test_stats_during_outage_returns_503(client, redis_double):
    redis_double.down = True

    response = client.get("/cache/stats")
    assert response.status_code == 503
    assert response.json()["message"] == "Cache indisponível"
