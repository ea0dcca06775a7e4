"""Order compilation: parallel column/direction lists -> sort terms."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import asc, desc

from .compiler import resolve_column


class SortDirection(str, enum.Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class SortTerm:
    """A column and its direction. ``direction=None`` leaves the database default."""

    column: str
    direction: SortDirection | None = None

    def __str__(self) -> str:
        if self.direction is None:
            return self.column
        return f"{self.column} {self.direction.value}"


def compile_order(
    columns: Sequence[str], directions: Sequence[str] = ()
) -> list[SortTerm]:
    """
    Pair *columns* with *directions* by position.

    A direction is used only if it exists at the same index and equals
    ``asc``/``desc`` case-insensitively; extra directions are ignored.
    Repeated columns are kept.
    """
    terms: list[SortTerm] = []
    for index, column in enumerate(columns):
        direction: SortDirection | None = None
        if index < len(directions):
            value = str(directions[index]).upper()
            if value in SortDirection.__members__:
                direction = SortDirection(value)
        terms.append(SortTerm(column, direction))
    return terms


def build_order_by(model: type[Any], terms: Sequence[SortTerm]) -> list[Any]:
    """Translate sort terms into ORDER BY expressions, preserving order."""
    order_clauses: list[Any] = []
    for term in terms:
        col = resolve_column(model, term.column)
        if term.direction is SortDirection.ASC:
            order_clauses.append(asc(col))
        elif term.direction is SortDirection.DESC:
            order_clauses.append(desc(col))
        else:
            order_clauses.append(col)
    return order_clauses
