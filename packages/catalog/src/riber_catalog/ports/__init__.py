from .repository import CatalogRepositoryScope, ICatalogRepository
from .storage import IImageStorage

__all__ = ["CatalogRepositoryScope", "ICatalogRepository", "IImageStorage"]
