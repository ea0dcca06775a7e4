"""
Query assembly.

Combines compiled condition clauses, sort terms and an optional
limit/offset window into ``Select`` statements. Clauses and terms are
applied in the order they were compiled; nothing is reordered.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, func, select

from .filters.compiler import build_where_clauses
from .filters.ordering import build_order_by

if TYPE_CHECKING:
    from .filters.conditions import ConditionClause
    from .filters.ordering import SortTerm
    from .filters.strategy import ConditionOperatorRegistry


def _apply_limit_offset(stmt: Select[Any], limit: int, offset: int) -> Select[Any]:
    """Values <= 0 mean "unset"."""
    if limit > 0:
        stmt = stmt.limit(limit)
    if offset > 0:
        stmt = stmt.offset(offset)
    return stmt


def build_select(
    model: type[Any],
    clauses: Sequence[ConditionClause] = (),
    terms: Sequence[SortTerm] = (),
    limit: int = 0,
    offset: int = 0,
    *,
    registry: ConditionOperatorRegistry | None = None,
) -> Select[Any]:
    """
    Build ``SELECT model WHERE ... ORDER BY ... LIMIT ... OFFSET ...``.

    Args:
        model: The mapped model class.
        clauses: Condition clauses, ANDed together.
        terms: Sort terms, applied in order.
        limit: Maximum rows; ``<= 0`` for no limit.
        offset: Rows to skip; ``<= 0`` for no offset.
        registry: Optional custom condition operator registry.
    """
    stmt = select(model)
    where = build_where_clauses(model, clauses, registry=registry)
    if where:
        stmt = stmt.where(*where)
    order_by = build_order_by(model, terms)
    if order_by:
        stmt = stmt.order_by(*order_by)
    return _apply_limit_offset(stmt, limit, offset)


def build_count(
    model: type[Any],
    clauses: Sequence[ConditionClause] = (),
    *,
    registry: ConditionOperatorRegistry | None = None,
) -> Select[Any]:
    """Build ``SELECT count(*) FROM model WHERE ...`` with the same clauses."""
    stmt = select(func.count()).select_from(model)
    where = build_where_clauses(model, clauses, registry=registry)
    if where:
        stmt = stmt.where(*where)
    return stmt
