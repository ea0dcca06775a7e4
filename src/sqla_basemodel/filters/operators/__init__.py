"""
Condition operator implementations and default registry.

Usage::

    from sqla_basemodel.filters.operators import DEFAULT_CONDITION_REGISTRY

    expr = DEFAULT_CONDITION_REGISTRY.apply(ConditionKind.LIKE, column, ("%a%",))
"""

from __future__ import annotations

from ..strategy import ConditionOperatorRegistry
from .set import BetweenOperator, OrListOperator
from .standard import EqualityOperator, LikeOperator


def build_default_condition_registry() -> ConditionOperatorRegistry:
    """Create a registry with the four built-in condition operators."""
    registry = ConditionOperatorRegistry()
    registry.register_all(
        EqualityOperator(),
        LikeOperator(),
        BetweenOperator(),
        OrListOperator(),
    )
    return registry


DEFAULT_CONDITION_REGISTRY: ConditionOperatorRegistry = (
    build_default_condition_registry()
)

__all__ = [
    "BetweenOperator",
    "DEFAULT_CONDITION_REGISTRY",
    "EqualityOperator",
    "LikeOperator",
    "OrListOperator",
    "build_default_condition_registry",
]
