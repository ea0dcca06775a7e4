from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import delete, func, select

from .exceptions import IsNewRecordError, NotNewRecordError, RecordNotFoundError
from .filters.compiler import compile_filter
from .filters.ordering import compile_order
from .models import BaseRecordMixin, is_new_record
from .pagination import DEFAULT_PAGE_ROWS, PagedFindResult, compute_page_window
from .query import build_count, build_select
from .uow import SQLAlchemyUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from .filters.schema import FilterSpec
    from .filters.strategy import ConditionOperatorRegistry

T = TypeVar("T", bound=BaseRecordMixin)

logger = logging.getLogger("sqla_basemodel.repository")


class BaseModelRepository(Generic[T]):
    """
    Generic data access for one record type.

    Mutations (``create``, ``save``, ``delete``, ``first_or_create``) run
    inside a unit of work: pass ``uow=`` to join an existing one, otherwise
    a self-managed one is opened from ``session_factory`` and committed
    when the call succeeds. Store errors propagate unchanged after the
    rollback.

    Reads (``find_by_id``, ``find_filter``, ``paged_find_filter``) use a
    fresh session with no explicit transaction unless ``uow=`` is given.

    Returned records outlive their session, so ``session_factory`` must be
    created with ``expire_on_commit=False`` (as
    :class:`~sqla_basemodel.engine.DatabaseManager` does)::

        repo = BaseModelRepository(Person, db.session_factory)
        person = await repo.create(Person(name="Ada", age=36))
        page = await repo.paged_find_filter(
            PersonFilter(age=CompareFilter(20, 40)),
            page=1,
            rows=10,
            order=["age"],
            sort=["desc"],
        )
    """

    def __init__(
        self,
        model: type[T],
        session_factory: async_sessionmaker[AsyncSession],
        *,
        registry: ConditionOperatorRegistry | None = None,
    ) -> None:
        self.model = model
        self._session_factory = session_factory
        self._registry = registry

    # -- session helpers ----------------------------------------------------

    @asynccontextmanager
    async def _mutation_scope(
        self, uow: SQLAlchemyUnitOfWork | None
    ) -> AsyncIterator[AsyncSession]:
        if uow is not None:
            yield uow.session
            return
        async with SQLAlchemyUnitOfWork(session_factory=self._session_factory) as own:
            yield own.session

    @asynccontextmanager
    async def _read_scope(
        self, uow: SQLAlchemyUnitOfWork | None
    ) -> AsyncIterator[AsyncSession]:
        if uow is not None:
            yield uow.session
            return
        async with self._session_factory() as session:
            yield session

    # -- mutations ----------------------------------------------------------

    async def create(self, record: T, uow: SQLAlchemyUnitOfWork | None = None) -> T:
        """Insert a new record; fills in ``id`` and both timestamps.

        Raises:
            NotNewRecordError: If the record already has an identity.
        """
        if not is_new_record(record):
            raise NotNewRecordError(record)

        if record.id == 0:
            record.id = None  # type: ignore[assignment]

        async with self._mutation_scope(uow) as session:
            session.add(record)
            await session.flush()
            await session.refresh(record)
        logger.debug("Created %s id=%s", self.model.__name__, record.id)
        return record

    async def save(self, record: T, uow: SQLAlchemyUnitOfWork | None = None) -> T:
        """Update an existing record and refresh its ``updated_time``.

        Returns the persistent instance, which differs from *record* when
        *record* was loaded in another session.

        Raises:
            IsNewRecordError: If the record has no identity yet.
        """
        if is_new_record(record):
            raise IsNewRecordError(record)

        async with self._mutation_scope(uow) as session:
            persistent = await session.merge(record)
            persistent.updated_time = func.current_timestamp()  # type: ignore[assignment]
            await session.flush()
            await session.refresh(persistent)
        logger.debug("Saved %s id=%s", self.model.__name__, persistent.id)
        return persistent

    async def delete(self, record: T, uow: SQLAlchemyUnitOfWork | None = None) -> None:
        """Delete the row matching the record's primary key."""
        async with self._mutation_scope(uow) as session:
            await session.execute(
                delete(self.model).where(self.model.id == record.id)
            )
        logger.debug("Deleted %s id=%s", self.model.__name__, record.id)

    async def first_or_create(
        self,
        defaults: dict[str, Any] | None = None,
        uow: SQLAlchemyUnitOfWork | None = None,
        **criteria: Any,
    ) -> tuple[T, bool]:
        """
        Return the first record whose attributes equal *criteria*, or
        create one from *criteria* plus *defaults*.

        Returns:
            ``(record, created)``.
        """
        async with self._mutation_scope(uow) as session:
            stmt = select(self.model).filter_by(**criteria).order_by(self.model.id)
            result = await session.execute(stmt.limit(1))
            found = result.scalars().first()
            if found is not None:
                return found, False

            record = self.model(**{**(defaults or {}), **criteria})
            session.add(record)
            await session.flush()
            await session.refresh(record)
        logger.debug("Created %s id=%s", self.model.__name__, record.id)
        return record, True

    # -- reads --------------------------------------------------------------

    async def find_by_id(
        self, record_id: int, uow: SQLAlchemyUnitOfWork | None = None
    ) -> T:
        """Load a record by primary key.

        Raises:
            RecordNotFoundError: If no row has that id.
        """
        async with self._read_scope(uow) as session:
            record = await session.get(self.model, record_id)
        if record is None:
            raise RecordNotFoundError(self.model.__name__, record_id)
        return record

    async def find_filter(
        self,
        filter: FilterSpec | None = None,  # noqa: A002
        order: Sequence[str] = (),
        sort: Sequence[str] = (),
        limit: int = 0,
        offset: int = 0,
        uow: SQLAlchemyUnitOfWork | None = None,
    ) -> list[T]:
        """
        Return all records matching *filter*, ordered by *order*/*sort*.

        ``limit`` and ``offset`` values ``<= 0`` are treated as unset.
        """
        clauses = compile_filter(filter)
        terms = compile_order(order, sort)
        stmt = build_select(
            self.model, clauses, terms, limit, offset, registry=self._registry
        )
        logger.debug(
            "find_filter %s clauses=%d order=%s limit=%d offset=%d",
            self.model.__name__,
            len(clauses),
            [str(t) for t in terms],
            limit,
            offset,
        )
        async with self._read_scope(uow) as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def paged_find_filter(
        self,
        filter: FilterSpec | None = None,  # noqa: A002
        page: int = 1,
        rows: int = DEFAULT_PAGE_ROWS,
        order: Sequence[str] = (),
        sort: Sequence[str] = (),
        uow: SQLAlchemyUnitOfWork | None = None,
    ) -> PagedFindResult[T]:
        """
        Count the records matching *filter*, then fetch one page of them.

        Both round-trips use the same clauses. They share a snapshot only
        when run inside the same ``uow``.
        """
        clauses = compile_filter(filter)
        terms = compile_order(order, sort)

        async with self._read_scope(uow) as session:
            count_stmt = build_count(self.model, clauses, registry=self._registry)
            total = int((await session.execute(count_stmt)).scalar_one())

            window = compute_page_window(total, page, rows)
            stmt = build_select(
                self.model,
                clauses,
                terms,
                limit=window.rows,
                offset=window.offset,
                registry=self._registry,
            )
            result = await session.execute(stmt)
            data = list(result.scalars().all())

        logger.debug(
            "paged_find_filter %s page=%d rows=%d total=%d",
            self.model.__name__,
            window.page,
            window.rows,
            total,
        )
        return PagedFindResult.from_window(window, total, data)
