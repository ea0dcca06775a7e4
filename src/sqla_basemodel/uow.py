"""
SQLAlchemy implementation of the Unit of Work pattern.

The transaction commits only when the wrapped block succeeds. Any
exception rolls the transaction back, skips the commit, and propagates
unchanged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from .exceptions import SessionManagementError, UnitOfWorkError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from types import TracebackType

    from sqlalchemy.ext.asyncio import AsyncSession

    AsyncSessionFactory = Callable[[], AsyncSession]

logger = logging.getLogger("sqla_basemodel.uow")

R = TypeVar("R")


class SQLAlchemyUnitOfWork:
    """
    Unit of Work implementation using SQLAlchemy AsyncSession.

    Supports two usage patterns:

    1. **Caller-Managed Sessions**:
       ```python
       async with SQLAlchemyUnitOfWork(session=session) as uow:
           uow.session.add(record)
       ```
       The session lifecycle is managed by the caller.

    2. **Self-Managed Sessions**:
       ```python
       factory = async_sessionmaker(engine, expire_on_commit=False)
       async with SQLAlchemyUnitOfWork(session_factory=factory) as uow:
           uow.session.add(record)
       ```
       The UoW creates and closes the session automatically.

    **Important:** Exactly one of `session` or `session_factory` must be provided.
    """

    def __init__(
        self,
        session: AsyncSession | None = None,
        session_factory: AsyncSessionFactory | None = None,
    ) -> None:
        if session is not None and session_factory is not None:
            raise SessionManagementError(
                "Cannot provide both 'session' and 'session_factory'. "
                "Use either caller-managed (session) or self-managed "
                "(session_factory) pattern."
            )

        if session is None and session_factory is None:
            raise SessionManagementError(
                "Must provide either 'session' or 'session_factory'. "
                "Use caller-managed pattern with session=(AsyncSession) "
                "or self-managed pattern with session_factory=(callable)."
            )

        self._session: AsyncSession | None = session
        self._session_factory = session_factory
        self._owns_session = session_factory is not None and session is None

    @property
    def session(self) -> AsyncSession:
        """Get the active session. Raises if session not yet created."""
        if self._session is None:
            raise UnitOfWorkError(
                "Session not yet created. Ensure __aenter__ was called."
            )
        return self._session

    async def __aenter__(self) -> SQLAlchemyUnitOfWork:
        """Begin a transaction, creating session if factory provided."""
        try:
            if self._owns_session and self._session_factory:
                self._session = self._session_factory()

            if not self.session.in_transaction():
                await self.session.begin()

            return self
        except Exception as e:  # noqa: BLE001
            if isinstance(e, SessionManagementError | UnitOfWorkError):
                raise
            raise SessionManagementError(f"Failed to initialize UoW: {e}") from e

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Commit on success; rollback without commit on error."""
        try:
            if exc_type is None:
                await self.commit()
            else:
                logger.warning(
                    "Rolling back transaction after %s: %s",
                    exc_type.__name__,
                    exc_val,
                )
                await self.rollback()
        finally:
            if self._owns_session and self._session is not None:
                try:
                    await self._session.close()
                except Exception as e:  # noqa: BLE001
                    raise SessionManagementError(
                        f"Failed to close session: {e}"
                    ) from e
                finally:
                    self._session = None

    async def commit(self) -> None:
        """Commit the current transaction.

        On failure the transaction is rolled back and the store error
        propagates as raised by the driver.
        """
        try:
            await self.session.commit()
        except Exception:
            logger.warning("Commit failed, rolling back", exc_info=True)
            await self.rollback()
            raise

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        try:
            if self.session.in_transaction():
                await self.session.rollback()
        except Exception as e:  # noqa: BLE001
            raise UnitOfWorkError(f"Failed to rollback transaction: {e}") from e


async def within_transaction(
    session_factory: AsyncSessionFactory,
    fn: Callable[[AsyncSession], Awaitable[R]],
) -> R:
    """Run ``await fn(session)`` inside a self-managed unit of work."""
    async with SQLAlchemyUnitOfWork(session_factory=session_factory) as uow:
        return await fn(uow.session)
