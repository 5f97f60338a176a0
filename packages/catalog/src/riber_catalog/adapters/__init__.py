"""Catalog adapters: in-memory fakes and local filesystem storage."""

from .local_storage import LocalImageStorage
from .memory import (
    InMemoryCatalogRepository,
    InMemoryCatalogUnitOfWork,
    InMemoryImageStorage,
)

__all__ = [
    "InMemoryCatalogRepository",
    "InMemoryCatalogUnitOfWork",
    "InMemoryImageStorage",
    "LocalImageStorage",
]
