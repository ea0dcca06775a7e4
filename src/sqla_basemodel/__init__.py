"""Generic async data-access layer over SQLAlchemy: filters, ordering, paging."""

from __future__ import annotations

from .config import Adapter, DBConfig
from .engine import DatabaseManager
from .exceptions import (
    BaseModelError,
    DatabaseConnectionError,
    FilterError,
    FilterTypeError,
    IsNewRecordError,
    NotNewRecordError,
    PersistenceError,
    PreconditionError,
    RecordNotFoundError,
    SessionManagementError,
    UnitOfWorkError,
    UnknownColumnError,
)
from .filters import (
    EMPTY,
    CompareFilter,
    ConditionClause,
    ConditionKind,
    FilterField,
    FilterSpec,
    SortDirection,
    SortTerm,
    build_where_clauses,
    compile_filter,
    compile_order,
)
from .models import Base, BaseRecordMixin, is_new_record
from .pagination import (
    DEFAULT_PAGE_ROWS,
    PagedFindResult,
    PageWindow,
    compute_page_window,
)
from .query import build_count, build_select
from .repository import BaseModelRepository
from .uow import SQLAlchemyUnitOfWork, within_transaction

__all__ = [
    # Configuration / engine
    "Adapter",
    "DBConfig",
    "DatabaseManager",
    # Records
    "Base",
    "BaseRecordMixin",
    "is_new_record",
    # Filters / ordering
    "EMPTY",
    "CompareFilter",
    "ConditionClause",
    "ConditionKind",
    "FilterField",
    "FilterSpec",
    "SortDirection",
    "SortTerm",
    "build_where_clauses",
    "compile_filter",
    "compile_order",
    # Query / pagination
    "DEFAULT_PAGE_ROWS",
    "PageWindow",
    "PagedFindResult",
    "build_count",
    "build_select",
    "compute_page_window",
    # Repository / transactions
    "BaseModelRepository",
    "SQLAlchemyUnitOfWork",
    "within_transaction",
    # Exceptions
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
