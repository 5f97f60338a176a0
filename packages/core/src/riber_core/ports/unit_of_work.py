"""UnitOfWork — one transaction, driven explicitly or with ``async with``."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class UnitOfWork(ABC):
    """
    A unit of work owns exactly one transaction.

    Callers drive it step by step (``begin_transaction``, ``save_changes``,
    then ``commit`` or ``rollback``) or through ``async with``, which
    begins on enter, commits when the block finishes and rolls back when
    it raises.

    Adapters decide what "transaction" means: a database session for
    SQL stores, staged writes for in-memory fakes.
    """

    @abstractmethod
    async def begin_transaction(self) -> None: ...

    @abstractmethod
    async def save_changes(self) -> None:
        """Flush pending writes into the open transaction without committing."""
        ...

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...

    async def __aenter__(self) -> UnitOfWork:
        await self.begin_transaction()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()
