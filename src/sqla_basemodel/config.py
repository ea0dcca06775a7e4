"""Database connection configuration."""

from __future__ import annotations

import enum
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.engine import URL

_TIMEZONE_RE = re.compile(r"^[A-Za-z0-9_+\-:/]+$")


class Adapter(str, enum.Enum):
    """Supported SQL dialects."""

    MYSQL = "mysql_adapter"
    POSTGRES = "postgres_adapter"
    SQLITE = "sqlite_adapter"


_DRIVERS: dict[Adapter, str] = {
    Adapter.MYSQL: "mysql+aiomysql",
    Adapter.POSTGRES: "postgresql+asyncpg",
    Adapter.SQLITE: "sqlite+aiosqlite",
}


class DBConfig(BaseModel):
    """
    Connection settings for :class:`~sqla_basemodel.engine.DatabaseManager`.

    ``database`` names the target database (file path for SQLite, empty
    for an in-memory SQLite database). Pool limits are ignored for SQLite.
    """

    model_config = ConfigDict(frozen=True)

    adapter: Adapter = Adapter.POSTGRES
    host: str = "localhost"
    port: int | None = None
    username: str | None = None
    password: str | None = Field(default=None, repr=False)
    database: str = ""
    timezone: str = "UTC"
    max_lifetime: int = 0
    idle_connections: int = 5
    open_connections: int = 10
    ssl: str | None = None
    log_mode: bool = False

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        if value and not _TIMEZONE_RE.match(value):
            raise ValueError(f"invalid timezone: {value!r}")
        return value

    @field_validator("idle_connections", "open_connections", "max_lifetime")
    @classmethod
    def _check_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must be >= 0")
        return value

    @property
    def driver(self) -> str:
        return _DRIVERS[self.adapter]

    def url(self) -> URL:
        """Build the SQLAlchemy URL for this configuration."""
        if self.adapter is Adapter.SQLITE:
            return URL.create(self.driver, database=self.database or None)
        return URL.create(
            self.driver,
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database or None,
        )

    def timezone_statement(self) -> str | None:
        """SQL that pins the session time zone, or None if unsupported."""
        if not self.timezone:
            return None
        if self.adapter is Adapter.POSTGRES:
            return f"SET TIME ZONE '{self.timezone}'"
        if self.adapter is Adapter.MYSQL:
            return f"SET time_zone = '{self.timezone}'"
        return None
