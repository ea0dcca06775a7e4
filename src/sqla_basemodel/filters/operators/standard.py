"""Equality and LIKE operators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import func

from ..conditions import LIKE_ESCAPE, ConditionKind
from ..strategy import ConditionOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class EqualityOperator(ConditionOperator):
    @property
    def kind(self) -> ConditionKind:
        return ConditionKind.EQUALITY

    def apply(self, column: Any, operands: tuple[Any, ...]) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column == operands[0])


class LikeOperator(ConditionOperator):
    """``LOWER(column) LIKE :pattern``; the pattern is lowercased and escaped."""

    @property
    def kind(self) -> ConditionKind:
        return ConditionKind.LIKE

    def apply(self, column: Any, operands: tuple[Any, ...]) -> ColumnElement[bool]:
        expr = func.lower(column).like(operands[0], escape=LIKE_ESCAPE)
        return cast("ColumnElement[bool]", expr)
