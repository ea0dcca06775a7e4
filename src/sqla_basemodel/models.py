"""
Declarative base and the base record shape every domain record embeds.

``id`` is assigned by the store on insert. ``created_time`` is set once by
the server on insert; ``updated_time`` is set by the server on insert and
refreshed on every save.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import BigInteger, DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for records managed by this package."""


class BaseRecordMixin:
    """Adds ``id``, ``created_time`` and ``updated_time`` columns."""

    id: Mapped[int] = mapped_column(
        Integer().with_variant(BigInteger, "postgresql"),
        primary_key=True,
        autoincrement=True,
    )
    created_time: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )
    updated_time: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
    )


def is_new_record(record: Any) -> bool:
    """Return True if *record* has no persisted identity (``id`` unset or 0)."""
    record_id = getattr(record, "id", None)
    return record_id is None or record_id == 0
