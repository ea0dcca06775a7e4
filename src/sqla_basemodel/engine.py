"""Async engine lifecycle: pooling, session time zone, ping and shutdown."""

from __future__ import annotations

import logging
import ssl
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .config import Adapter, DBConfig
from .exceptions import DatabaseConnectionError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger("sqla_basemodel.engine")


def engine_options(config: DBConfig) -> dict[str, Any]:
    """Keyword arguments for ``create_async_engine`` derived from *config*."""
    options: dict[str, Any] = {"echo": config.log_mode}
    if config.adapter is Adapter.SQLITE:
        return options

    options["pool_pre_ping"] = True
    options["pool_size"] = config.idle_connections
    options["max_overflow"] = max(
        0, config.open_connections - config.idle_connections
    )
    if config.max_lifetime > 0:
        options["pool_recycle"] = config.max_lifetime
    if config.ssl and config.ssl != "disable":
        options["connect_args"] = {"ssl": _ssl_connect_arg(config)}
    return options


def _ssl_connect_arg(config: DBConfig) -> Any:
    # asyncpg takes the sslmode string; aiomysql needs an SSLContext.
    if config.adapter is not Adapter.MYSQL:
        return config.ssl
    context = ssl.create_default_context()
    if config.ssl == "skip-verify":
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


class DatabaseManager:
    """Owns the process-wide async engine and its session factory.

    Call connect() before use, close() on shutdown, and health_check() for
    probes. The engine is safe for concurrent use; each operation should
    take its own session from ``session_factory``.
    """

    def __init__(self, config: DBConfig, **engine_kwargs: Any) -> None:
        self.config = config
        self._engine_kwargs = engine_kwargs
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(self) -> None:
        """Create the engine and ping the database. Idempotent."""
        if self._engine is not None:
            return

        options = {**engine_options(self.config), **self._engine_kwargs}
        try:
            engine = create_async_engine(self.config.url(), **options)
        except (SQLAlchemyError, ImportError, ValueError) as e:
            raise DatabaseConnectionError(f"Failed to create engine: {e}") from e

        statement = self.config.timezone_statement()
        if statement is not None:
            _install_timezone_listener(
                engine,
                statement,
                autocommit=self.config.adapter is Adapter.POSTGRES,
            )

        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            await engine.dispose()
            raise DatabaseConnectionError(f"Database ping failed: {e}") from e

        self._engine = engine
        self._session_factory = async_sessionmaker(engine, expire_on_commit=False)
        logger.info(
            "Connected to %s database %r",
            self.config.adapter.value,
            self.config.database,
        )

    async def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connection closed")

    async def health_check(self) -> bool:
        """Return True if the database answers ``SELECT 1``."""
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            logger.warning("Database health check failed", exc_info=True)
            return False
        return True

    @property
    def engine(self) -> AsyncEngine:
        """Return the engine; raises if not connected."""
        if self._engine is None:
            raise DatabaseConnectionError("Not connected; call connect() first")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Return the session factory; raises if not connected."""
        if self._session_factory is None:
            raise DatabaseConnectionError("Not connected; call connect() first")
        return self._session_factory


def _install_timezone_listener(
    engine: AsyncEngine, statement: str, *, autocommit: bool
) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _set_timezone(dbapi_connection: Any, connection_record: Any) -> None:
        _set_session_timezone(dbapi_connection, statement, autocommit=autocommit)


def _set_session_timezone(
    dbapi_connection: Any, statement: str, *, autocommit: bool
) -> None:
    """Run *statement* on a freshly opened DBAPI connection.

    With ``autocommit`` the statement runs outside any transaction, since
    PostgreSQL reverts a ``SET`` whose transaction is rolled back.
    """
    if not autocommit:
        _execute(dbapi_connection, statement)
        return

    existing = dbapi_connection.autocommit
    dbapi_connection.autocommit = True
    try:
        _execute(dbapi_connection, statement)
    finally:
        dbapi_connection.autocommit = existing


def _execute(dbapi_connection: Any, statement: str) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute(statement)
    finally:
        cursor.close()
