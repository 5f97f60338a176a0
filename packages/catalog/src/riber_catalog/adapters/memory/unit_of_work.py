"""InMemoryCatalogUnitOfWork — commits the staged writes of a catalog repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

from riber_core.adapters.memory.unit_of_work import InMemoryUnitOfWork

if TYPE_CHECKING:
    from .repository import InMemoryCatalogRepository


class InMemoryCatalogUnitOfWork(InMemoryUnitOfWork):
    def __init__(self, repository: InMemoryCatalogRepository) -> None:
        super().__init__()
        self.repository = repository

    async def commit(self) -> None:
        already_finished = self.committed or self.rolled_back
        await super().commit()
        if not already_finished:
            self.repository.apply_pending()

    async def rollback(self) -> None:
        await super().rollback()
        self.repository.discard_pending()
