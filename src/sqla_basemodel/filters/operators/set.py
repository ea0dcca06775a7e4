"""Range and list operators: between, or-list."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import or_

from ..conditions import ConditionKind
from ..strategy import ConditionOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class BetweenOperator(ConditionOperator):
    @property
    def kind(self) -> ConditionKind:
        return ConditionKind.BETWEEN

    def apply(self, column: Any, operands: tuple[Any, ...]) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.between(operands[0], operands[1]))


class OrListOperator(ConditionOperator):
    """``column = :v0 OR column = :v1 ...`` with every member bound."""

    @property
    def kind(self) -> ConditionKind:
        return ConditionKind.OR

    def apply(self, column: Any, operands: tuple[Any, ...]) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", or_(*(column == v for v in operands)))
