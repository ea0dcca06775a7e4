"""
Condition operator compilation strategy.

Each :class:`ConditionKind` is compiled by an isolated
``ConditionOperator`` registered in a ``ConditionOperatorRegistry``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from .conditions import ConditionKind


class ConditionOperator(ABC):
    """
    Strategy interface for compiling a condition clause
    into a SQLAlchemy ``ColumnElement[bool]``.
    """

    @property
    @abstractmethod
    def kind(self) -> ConditionKind:
        """The condition kind this strategy handles."""
        ...

    @abstractmethod
    def apply(
        self,
        column: Any,
        operands: tuple[Any, ...],
    ) -> ColumnElement[bool]:
        """
        Build a SQLAlchemy filter clause.

        Args:
            column: A SQLAlchemy column.
            operands: The clause's bound operands.

        Returns:
            A SQLAlchemy boolean expression.
        """
        ...


class ConditionOperatorRegistry:
    """Registry of ``ConditionOperator`` instances keyed by :class:`ConditionKind`."""

    def __init__(self) -> None:
        self._operators: dict[ConditionKind, ConditionOperator] = {}

    def register(self, operator: ConditionOperator) -> None:
        self._operators[operator.kind] = operator

    def register_all(self, *operators: ConditionOperator) -> None:
        for op in operators:
            self.register(op)

    def get(self, kind: ConditionKind) -> ConditionOperator | None:
        return self._operators.get(kind)

    @property
    def supported_kinds(self) -> set[ConditionKind]:
        return set(self._operators.keys())

    def apply(
        self,
        kind: ConditionKind,
        column: Any,
        operands: tuple[Any, ...],
    ) -> ColumnElement[bool]:
        """
        Look up the operator and apply.

        Raises:
            ValueError: If no operator is registered for *kind*.
        """
        op = self.get(kind)
        if op is None:
            raise ValueError(f"Unsupported condition kind: {kind}")
        return op.apply(column, operands)
