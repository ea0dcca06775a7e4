"""Condition primitives shared by the filter compiler and its operators."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

#: The universal "absent" value for filter fields.
EMPTY = ""

#: Escape character for LIKE patterns built by the filter compiler.
LIKE_ESCAPE = "\\"


class ConditionKind(str, enum.Enum):
    """How a filter field is turned into a predicate."""

    EQUALITY = "EQUALITY"
    LIKE = "LIKE"
    BETWEEN = "BETWEEN"
    OR = "OR"


@dataclass(frozen=True)
class CompareFilter:
    """Inclusive range payload for ``BETWEEN`` fields.

    An empty ``value1`` suppresses the clause regardless of ``value2``.
    """

    value1: Any = EMPTY
    value2: Any = EMPTY

    @property
    def is_empty(self) -> bool:
        return is_empty(self.value1)


@dataclass(frozen=True)
class ConditionClause:
    """One compiled predicate: a column, its condition kind and bound operands."""

    column: str
    kind: ConditionKind
    operands: tuple[Any, ...]


def is_empty(value: Any) -> bool:
    """Return True for the empty sentinel (``""``) and ``None``."""
    return value is None or (isinstance(value, str) and value == EMPTY)
