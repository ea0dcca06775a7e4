"""Exceptions for the basemodel data-access layer."""

from __future__ import annotations


class BaseModelError(Exception):
    """Root exception for the entire package."""


# ── Mutation preconditions ───────────────────────────────────────────


class PreconditionError(BaseModelError):
    """Base class for new-vs-existing record violations.

    Raised before any store round-trip is attempted.
    """


class NotNewRecordError(PreconditionError):
    """Raised by ``create`` when the record already has a persisted identity."""

    def __init__(self, record: object) -> None:
        self.record = record
        super().__init__(
            f"cannot create row. not a new record: "
            f"{type(record).__name__}(id={getattr(record, 'id', None)!r})"
        )


class IsNewRecordError(PreconditionError):
    """Raised by ``save`` when the record has no persisted identity yet."""

    def __init__(self, record: object) -> None:
        self.record = record
        super().__init__(
            f"cannot save row. it is a new record: {type(record).__name__}"
        )


# ── Filter compilation ───────────────────────────────────────────────


class FilterError(BaseModelError):
    """Base class for errors raised while compiling filters and ordering."""


class FilterTypeError(FilterError, TypeError):
    """Raised when a filter value does not match its condition kind."""

    def __init__(self, field: str, kind: str, expected: str, value: object) -> None:
        self.field = field
        self.kind = kind
        self.value = value
        super().__init__(
            f"filter field {field!r} ({kind}) expects {expected}, "
            f"got {type(value).__name__}"
        )


class UnknownColumnError(FilterError, AttributeError):
    """Raised when a filter or sort column does not exist on the model."""

    def __init__(self, model: type, column: str) -> None:
        self.model = model
        self.column = column
        super().__init__(f"Model {model.__name__} has no column {column!r}")


# ── Persistence ──────────────────────────────────────────────────────


class PersistenceError(BaseModelError):
    """Base class for all persistence-related errors."""


class SessionManagementError(PersistenceError):
    """Raised when session creation or management fails."""


class UnitOfWorkError(PersistenceError):
    """Raised when Unit of Work operations fail."""


class DatabaseConnectionError(PersistenceError):
    """Raised when the engine cannot be created or the ping fails."""


class RecordNotFoundError(PersistenceError):
    """Raised when a record cannot be found by ID."""

    def __init__(self, record_type: str, record_id: object) -> None:
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(f"{record_type} with id={record_id!r} not found")


__all__: list[str] = [
    "BaseModelError",
    "DatabaseConnectionError",
    "FilterError",
    "FilterTypeError",
    "IsNewRecordError",
    "NotNewRecordError",
    "PersistenceError",
    "PreconditionError",
    "RecordNotFoundError",
    "SessionManagementError",
    "UnitOfWorkError",
    "UnknownColumnError",
]
