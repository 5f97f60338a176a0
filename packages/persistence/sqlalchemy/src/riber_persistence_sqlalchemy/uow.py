"""
SQLAlchemy implementation of the Unit of Work pattern.
"""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING

from riber_core.ports.unit_of_work import UnitOfWork

from .exceptions import SessionManagementError, UnitOfWorkError

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from sqlalchemy.ext.asyncio import AsyncSession

    AsyncSessionFactory = Callable[[], AsyncSession]

logger = logging.getLogger("riber.uow.sqlalchemy")


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of Work over one SQLAlchemy ``AsyncSession`` transaction.

    Supports two usage patterns:

    1. **Caller-Managed Sessions**:
       ```python
       uow = SQLAlchemyUnitOfWork(session=session)
       await uow.begin_transaction()
       ...
       await uow.commit()
       ```
       The session lifecycle belongs to whoever created it.

    2. **Self-Managed Sessions**:
       ```python
       factory = async_sessionmaker(engine)
       async with SQLAlchemyUnitOfWork(session_factory=factory) as uow:
           ...
       ```
       The UoW creates the session on begin and closes it on exit.

    Exactly one of ``session`` or ``session_factory`` must be provided.
    Driver errors raised by ``save_changes``, ``commit`` and ``rollback``
    are wrapped in :class:`UnitOfWorkError`; a failed commit is rolled
    back before the error propagates.
    """

    def __init__(
        self,
        session: AsyncSession | None = None,
        session_factory: AsyncSessionFactory | None = None,
    ) -> None:
        if session is not None and session_factory is not None:
            raise SessionManagementError(
                "Provide either 'session' or 'session_factory', not both."
            )
        if session is None and session_factory is None:
            raise SessionManagementError(
                "Must provide either 'session' or 'session_factory'."
            )

        self._session: AsyncSession | None = session
        self._session_factory = session_factory
        self._owns_session = session_factory is not None
        super().__init__()

    @property
    def session(self) -> AsyncSession:
        """The active session. Raises until the transaction has begun."""
        if self._session is None:
            raise UnitOfWorkError(
                "Session not yet created. Call begin_transaction() first."
            )
        return self._session

    async def begin_transaction(self) -> None:
        try:
            if self._session is None and self._session_factory is not None:
                self._session = self._session_factory()
            if not self.session.in_transaction():
                await self.session.begin()
        except (SessionManagementError, UnitOfWorkError):
            raise
        except Exception as e:  # noqa: BLE001
            raise SessionManagementError(f"Failed to begin transaction: {e}") from e

    async def save_changes(self) -> None:
        """Flush pending ORM changes so constraint errors surface before commit."""
        try:
            await self.session.flush()
        except Exception as e:  # noqa: BLE001
            raise UnitOfWorkError(f"Failed to flush changes: {e}") from e

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except Exception as e:  # noqa: BLE001
            with contextlib.suppress(Exception):
                await self.rollback()
            raise UnitOfWorkError(f"Failed to commit transaction: {e}") from e

    async def rollback(self) -> None:
        try:
            if self.session.in_transaction():
                await self.session.rollback()
        except Exception as e:  # noqa: BLE001
            raise UnitOfWorkError(f"Failed to rollback transaction: {e}") from e

    async def close(self) -> None:
        """Close a self-managed session; no-op for caller-managed ones."""
        if not self._owns_session or self._session is None:
            return
        try:
            await self._session.close()
        except Exception as e:  # noqa: BLE001
            raise SessionManagementError(f"Failed to close session: {e}") from e
        finally:
            self._session = None

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            await super().__aexit__(exc_type, exc_val, exc_tb)
        finally:
            await self.close()
