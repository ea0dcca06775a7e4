"""Tests for DBConfig and engine option derivation."""

from __future__ import annotations

import ssl

import pytest
from pydantic import ValidationError

from sqla_basemodel import Adapter, DBConfig
from sqla_basemodel.engine import engine_options


def test_postgres_url() -> None:
    config = DBConfig(
        adapter=Adapter.POSTGRES,
        host="db",
        port=5432,
        username="u",
        password="p",
        database="app",
    )
    url = config.url()
    assert url.render_as_string(hide_password=False) == (
        "postgresql+asyncpg://u:p@db:5432/app"
    )


def test_mysql_url_from_adapter_string() -> None:
    config = DBConfig(adapter="mysql_adapter", host="db", port=3306, database="app")
    assert config.url().drivername == "mysql+aiomysql"
    assert config.url().database == "app"


def test_sqlite_in_memory_url() -> None:
    config = DBConfig(adapter=Adapter.SQLITE)
    assert config.url().render_as_string() == "sqlite+aiosqlite://"


def test_password_hidden_from_repr() -> None:
    assert "secret" not in repr(DBConfig(password="secret"))


def test_config_is_frozen() -> None:
    config = DBConfig()
    with pytest.raises(ValidationError):
        config.host = "elsewhere"  # type: ignore[misc]


def test_timezone_statements() -> None:
    assert DBConfig(timezone="Asia/Jakarta").timezone_statement() == (
        "SET TIME ZONE 'Asia/Jakarta'"
    )
    assert DBConfig(adapter=Adapter.MYSQL, timezone="+07:00").timezone_statement() == (
        "SET time_zone = '+07:00'"
    )
    assert DBConfig(adapter=Adapter.SQLITE).timezone_statement() is None
    assert DBConfig(timezone="").timezone_statement() is None


def test_timezone_rejects_sql() -> None:
    with pytest.raises(ValidationError, match="invalid timezone"):
        DBConfig(timezone="UTC'; DROP TABLE people; --")


def test_negative_pool_limits_rejected() -> None:
    with pytest.raises(ValidationError):
        DBConfig(idle_connections=-1)


def test_engine_options_pool_limits() -> None:
    config = DBConfig(
        idle_connections=5, open_connections=20, max_lifetime=300, log_mode=True
    )
    options = engine_options(config)
    assert options["echo"] is True
    assert options["pool_size"] == 5
    assert options["max_overflow"] == 15
    assert options["pool_recycle"] == 300
    assert "connect_args" not in options


def test_engine_options_ssl() -> None:
    assert engine_options(DBConfig(ssl="require"))["connect_args"] == {
        "ssl": "require"
    }
    assert "connect_args" not in engine_options(DBConfig(ssl="disable"))


def test_engine_options_mysql_ssl_builds_context() -> None:
    options = engine_options(DBConfig(adapter=Adapter.MYSQL, ssl="true"))
    context = options["connect_args"]["ssl"]
    assert isinstance(context, ssl.SSLContext)
    assert context.verify_mode == ssl.CERT_REQUIRED

    options = engine_options(DBConfig(adapter=Adapter.MYSQL, ssl="skip-verify"))
    context = options["connect_args"]["ssl"]
    assert context.check_hostname is False
    assert context.verify_mode == ssl.CERT_NONE


def test_engine_options_sqlite_skips_pool() -> None:
    assert engine_options(DBConfig(adapter=Adapter.SQLITE)) == {"echo": False}
