from .repository import InMemoryCatalogRepository
from .storage import InMemoryImageStorage
from .unit_of_work import InMemoryCatalogUnitOfWork

__all__ = [
    "InMemoryCatalogRepository",
    "InMemoryCatalogUnitOfWork",
    "InMemoryImageStorage",
]
