"""
Tests for Settings and the logging helpers.
"""

import logging

import pytest

from storefront.config import Settings
from storefront.logging_config import configure_logging, log


def test_database_url_from_parts():
    config = Settings(
        database_url_override=None,
        db_driver="mysql+aiomysql",
        db_host="db.internal",
        db_port=3307,
        db_user="loja",
        db_password="s3cr@t",
        db_name="vendas",
    )
    url = config.database_url
    assert url.drivername == "mysql+aiomysql"
    assert url.host == "db.internal"
    assert url.port == 3307
    assert url.username == "loja"
    assert url.password == "s3cr@t"
    assert url.database == "vendas"


def test_database_url_override():
    config = Settings(database_url_override="sqlite+aiosqlite:///tmp/loja.db")
    assert config.database_url.drivername == "sqlite+aiosqlite"


@pytest.mark.parametrize(
    ("environment", "expected"),
    [("production", True), ("PRODUCTION", True), ("development", False), ("test", False)],
)
def test_is_production(environment, expected):
    assert Settings(environment=environment).is_production is expected


@pytest.mark.parametrize(
    "overrides",
    [{"cache_ttl": 0}, {"cache_backend": "memcached"}, {"log_format": "xml"}],
)
def test_invalid_settings(overrides):
    with pytest.raises(ValueError):
        Settings(**overrides)


@pytest.mark.parametrize("log_format", ["console", "json"])
def test_log(caplog, log_format):
    configure_logging("info", log_format)
    with caplog.at_level(logging.INFO):
        log("info", "Servidor rodando na porta 3000", port=3000)
    assert "Servidor rodando na porta 3000" in caplog.text
