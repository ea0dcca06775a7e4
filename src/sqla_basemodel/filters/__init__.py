"""
Filter and order compilation.

Public API:
    - ``FilterSpec`` / ``FilterField`` — declarative filter specifications
    - ``compile_filter(spec)`` — specification to ``ConditionClause`` list
    - ``build_where_clauses(model, clauses)`` — clauses to SQLAlchemy
      expressions
    - ``compile_order(columns, directions)`` / ``build_order_by(model, terms)``
    - ``ConditionOperator`` / ``ConditionOperatorRegistry`` — extension
      points for custom condition kinds
"""

from .compiler import build_where_clauses, compile_filter, escape_like, resolve_column
from .conditions import (
    EMPTY,
    LIKE_ESCAPE,
    CompareFilter,
    ConditionClause,
    ConditionKind,
    is_empty,
)
from .operators import DEFAULT_CONDITION_REGISTRY, build_default_condition_registry
from .ordering import SortDirection, SortTerm, build_order_by, compile_order
from .schema import FilterField, FilterSpec
from .strategy import ConditionOperator, ConditionOperatorRegistry

__all__ = [
    "DEFAULT_CONDITION_REGISTRY",
    "EMPTY",
    "LIKE_ESCAPE",
    "CompareFilter",
    "ConditionClause",
    "ConditionKind",
    "ConditionOperator",
    "ConditionOperatorRegistry",
    "FilterField",
    "FilterSpec",
    "SortDirection",
    "SortTerm",
    "build_default_condition_registry",
    "build_order_by",
    "build_where_clauses",
    "compile_filter",
    "compile_order",
    "escape_like",
    "is_empty",
    "resolve_column",
]
