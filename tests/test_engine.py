"""Tests for DatabaseManager lifecycle and its session time zone hook."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

import sqla_basemodel.engine as engine_module
from sqla_basemodel import (
    Adapter,
    BaseModelRepository,
    DatabaseConnectionError,
    DatabaseManager,
    DBConfig,
)
from sqla_basemodel.engine import _install_timezone_listener, _set_session_timezone

from .models import Base, Person


@pytest.fixture
async def manager():
    db = DatabaseManager(DBConfig(adapter=Adapter.SQLITE), poolclass=StaticPool)
    await db.connect()
    yield db
    await db.close()


@pytest.mark.asyncio
async def test_connect_and_health_check(manager):
    assert await manager.health_check() is True

    async with manager.session_factory() as session:
        assert (await session.execute(text("SELECT 1"))).scalar_one() == 1


@pytest.mark.asyncio
async def test_connect_is_idempotent(manager):
    engine = manager.engine
    await manager.connect()
    assert manager.engine is engine


@pytest.mark.asyncio
async def test_close_releases_engine(manager):
    await manager.close()

    assert await manager.health_check() is False
    with pytest.raises(DatabaseConnectionError, match="Not connected"):
        _ = manager.engine
    with pytest.raises(DatabaseConnectionError):
        _ = manager.session_factory


@pytest.mark.asyncio
async def test_repository_over_managed_engine(manager):
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    repo = BaseModelRepository(Person, manager.session_factory)
    person = await repo.create(Person(name="Ada"))
    assert (await repo.find_by_id(person.id)).name == "Ada"


@pytest.mark.asyncio
async def test_ping_failure_raises(tmp_path):
    missing = tmp_path / "missing-dir" / "db.sqlite"
    db = DatabaseManager(DBConfig(adapter=Adapter.SQLITE, database=str(missing)))

    with pytest.raises(DatabaseConnectionError, match="ping failed"):
        await db.connect()
    with pytest.raises(DatabaseConnectionError):
        _ = db.engine


# ---------------------------------------------------------------------------
# Session time zone hook
# ---------------------------------------------------------------------------


def _dbapi_connection(seen: list[tuple[str, bool]]) -> MagicMock:
    conn = MagicMock()
    conn.autocommit = False
    conn.cursor.return_value.execute.side_effect = lambda statement: seen.append(
        (statement, conn.autocommit)
    )
    return conn


def test_timezone_statement_runs_in_autocommit() -> None:
    seen: list[tuple[str, bool]] = []
    conn = _dbapi_connection(seen)

    _set_session_timezone(conn, "SET TIME ZONE 'UTC'", autocommit=True)

    assert seen == [("SET TIME ZONE 'UTC'", True)]
    assert conn.autocommit is False
    conn.cursor.return_value.close.assert_called_once()


def test_timezone_autocommit_restored_on_failure() -> None:
    conn = MagicMock()
    conn.autocommit = False
    conn.cursor.return_value.execute.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        _set_session_timezone(conn, "SET TIME ZONE 'UTC'", autocommit=True)

    assert conn.autocommit is False
    conn.cursor.return_value.close.assert_called_once()


def test_timezone_statement_without_autocommit() -> None:
    seen: list[tuple[str, bool]] = []
    conn = _dbapi_connection(seen)

    _set_session_timezone(conn, "SET time_zone = 'UTC'", autocommit=False)

    assert seen == [("SET time_zone = 'UTC'", False)]


@pytest.mark.asyncio
async def test_connect_listener_runs_on_new_connections():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    _install_timezone_listener(engine, "PRAGMA foreign_keys = ON", autocommit=False)
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("PRAGMA foreign_keys"))
            assert result.scalar_one() == 1
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_postgres_timezone_hook_uses_autocommit(monkeypatch):
    sqlite_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool
    )
    installed: list[tuple[str, bool]] = []
    monkeypatch.setattr(
        engine_module, "create_async_engine", lambda url, **kwargs: sqlite_engine
    )
    monkeypatch.setattr(
        engine_module,
        "_install_timezone_listener",
        lambda engine, statement, *, autocommit: installed.append(
            (statement, autocommit)
        ),
    )

    db = DatabaseManager(DBConfig(adapter=Adapter.POSTGRES, timezone="Asia/Jakarta"))
    await db.connect()
    try:
        assert installed == [("SET TIME ZONE 'Asia/Jakarta'", True)]
    finally:
        await db.close()
