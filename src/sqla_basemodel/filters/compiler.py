"""
Compile a :class:`FilterSpec` into condition clauses and SQLAlchemy filters.

Two stages:

1. ``compile_filter`` walks the specification's fields in declaration order
   and emits one :class:`ConditionClause` per non-empty field. Values are
   checked against the field's condition kind; mismatches raise
   :class:`FilterTypeError`.
2. ``build_where_clauses`` resolves each clause's column on the mapped
   model and delegates to the operator registry, returning one
   ``ColumnElement[bool]`` per clause. The caller ANDs them together.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from ..exceptions import FilterTypeError, UnknownColumnError
from .conditions import (
    LIKE_ESCAPE,
    CompareFilter,
    ConditionClause,
    ConditionKind,
    is_empty,
)
from .operators import DEFAULT_CONDITION_REGISTRY

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from .schema import FilterField, FilterSpec
    from .strategy import ConditionOperatorRegistry


# ---------------------------------------------------------------------------
# Stage 1: specification -> condition clauses
# ---------------------------------------------------------------------------


def compile_filter(spec: FilterSpec | None) -> list[ConditionClause]:
    """
    Build the ordered condition clauses for *spec*.

    Args:
        spec: A filter specification instance, or ``None`` for no filter.

    Returns:
        Clauses in field declaration order (possibly empty).

    Raises:
        FilterTypeError: If a field's value does not match its kind.
    """
    if spec is None:
        return []

    clauses: list[ConditionClause] = []
    for field, value in spec.items():
        if is_empty(value):
            continue
        clause = _compile_field(field, value)
        if clause is not None:
            clauses.append(clause)
    return clauses


def _compile_field(field: FilterField, value: Any) -> ConditionClause | None:
    column = field.column or field.name

    if field.kind is ConditionKind.LIKE:
        if not isinstance(value, str):
            raise FilterTypeError(field.name, field.kind.value, "str", value)
        pattern = f"%{escape_like(value.lower())}%"
        return ConditionClause(column, field.kind, (pattern,))

    if field.kind is ConditionKind.BETWEEN:
        if not isinstance(value, CompareFilter):
            raise FilterTypeError(field.name, field.kind.value, "CompareFilter", value)
        if value.is_empty:
            return None
        return ConditionClause(column, field.kind, (value.value1, value.value2))

    if field.kind is ConditionKind.OR:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise FilterTypeError(
                field.name, field.kind.value, "a sequence of str", value
            )
        for member in value:
            if not isinstance(member, str):
                raise FilterTypeError(
                    field.name, field.kind.value, "a sequence of str", member
                )
        if not value:
            return None
        return ConditionClause(column, field.kind, tuple(value))

    if isinstance(value, (CompareFilter, Mapping)) or (
        isinstance(value, Sequence) and not isinstance(value, (str, bytes))
    ):
        raise FilterTypeError(field.name, field.kind.value, "a scalar", value)
    return ConditionClause(column, ConditionKind.EQUALITY, (value,))


def escape_like(value: str) -> str:
    """Escape ``%`` and ``_`` so *value* matches literally in a LIKE."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


# ---------------------------------------------------------------------------
# Stage 2: condition clauses -> SQLAlchemy expressions
# ---------------------------------------------------------------------------


def resolve_column(model: type[Any], name: str) -> Any:
    """Look up a table column on *model* by its database column name."""
    for column in model.__table__.columns:
        if column.name == name:
            return column
    raise UnknownColumnError(model, name)


def build_where_clauses(
    model: type[Any],
    clauses: Sequence[ConditionClause],
    *,
    registry: ConditionOperatorRegistry | None = None,
) -> list[ColumnElement[bool]]:
    """
    Translate condition clauses into SQLAlchemy boolean expressions.

    Args:
        model: The mapped model class the clauses target.
        clauses: Output of :func:`compile_filter`.
        registry: Optional custom operator registry. Falls back to
            ``DEFAULT_CONDITION_REGISTRY``.

    Returns:
        One expression per clause, in the same order.
    """
    reg = registry or DEFAULT_CONDITION_REGISTRY
    return [
        reg.apply(clause.kind, resolve_column(model, clause.column), clause.operands)
        for clause in clauses
    ]
