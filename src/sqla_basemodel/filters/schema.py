"""
Declarative filter specifications.

A filter specification is a plain class whose attributes are declared with
:class:`FilterField`. The ``attribute -> (column, kind)`` mapping is
collected once, when the class is created, so compiling a filter never has
to inspect types at runtime::

    class PersonFilter(FilterSpec):
        name = FilterField(kind=ConditionKind.LIKE)
        age = FilterField("age", ConditionKind.BETWEEN)
        status = FilterField(kind=ConditionKind.OR)
        email = FilterField("email_address")

    spec = PersonFilter(name="smith", age=CompareFilter(20, 40))

Fields that are not passed keep the empty sentinel ``""`` and do not take
part in filtering.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, ClassVar

from .conditions import EMPTY, ConditionKind


class FilterField:
    """Declares one filterable attribute: its target column and condition kind."""

    def __init__(
        self,
        column: str | None = None,
        kind: ConditionKind | str = ConditionKind.EQUALITY,
    ) -> None:
        self.column = column
        self.kind = ConditionKind(kind)
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        if self.column is None:
            self.column = name

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance.__dict__.get(self.name, EMPTY)

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__[self.name] = value

    def __repr__(self) -> str:
        return (
            f"FilterField(name={self.name!r}, column={self.column!r}, "
            f"kind={self.kind.value})"
        )


class FilterSpec:
    """Base class for caller-defined filter specifications."""

    __filter_fields__: ClassVar[tuple[FilterField, ...]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Base classes first, then declaration order within each class.
        declared: dict[str, FilterField] = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, FilterField):
                    declared[name] = value
        cls.__filter_fields__ = tuple(declared.values())

    def __init__(self, **values: Any) -> None:
        known = {f.name for f in self.__filter_fields__}
        for name, value in values.items():
            if name not in known:
                raise TypeError(
                    f"{type(self).__name__} got an unexpected filter field {name!r}"
                )
            setattr(self, name, value)

    @classmethod
    def fields(cls) -> tuple[FilterField, ...]:
        """Registered field declarations in declaration order."""
        return cls.__filter_fields__

    def items(self) -> Iterator[tuple[FilterField, Any]]:
        """Yield ``(field, value)`` pairs in declaration order."""
        for field in self.__filter_fields__:
            yield field, getattr(self, field.name)

    def __repr__(self) -> str:
        values = ", ".join(f"{f.name}={v!r}" for f, v in self.items())
        return f"{type(self).__name__}({values})"
