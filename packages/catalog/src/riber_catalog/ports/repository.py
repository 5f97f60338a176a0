"""ICatalogRepository — persistence port for the catalog."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    from riber_core.domain.specification import ISpecification

    from ..domain.category import ProductCategory
    from ..domain.image import Image
    from ..domain.product import Product


@runtime_checkable
class ICatalogRepository(Protocol):
    """
    Catalog persistence, scoped by tenant where rows are tenant-owned.

    Writes join the transaction of the unit of work the repository was
    built with; nothing is visible to other readers before it commits.
    """

    async def find_category(
        self, specification: ISpecification[ProductCategory], tenant_id: UUID
    ) -> ProductCategory | None:
        """First category of *tenant_id* satisfying *specification*, or ``None``."""
        ...

    async def find_products(
        self, specification: ISpecification[Product], tenant_id: UUID
    ) -> list[Product]:
        ...

    async def find_images(self, specification: ISpecification[Image]) -> list[Image]:
        """Image records of every tenant satisfying *specification*.

        Soft-deleted records are included unless *specification* excludes them.
        """
        ...

    async def create_category(self, category: ProductCategory) -> None: ...

    async def create_image(self, image: Image) -> None: ...

    async def create_product(self, product: Product) -> None: ...

    async def list_unreferenced_images(self) -> list[Image]:
        """
        Image records whose stored object should be removed.

        Covers images explicitly marked for deletion and images no product
        references that are older than the repository's grace period.
        Soft-deleted records are excluded. Records are never removed here.
        """
        ...


CatalogRepositoryScope: TypeAlias = Callable[
    [], AbstractAsyncContextManager[ICatalogRepository]
]
"""Opens a repository on a fresh transaction and closes it on exit.

Long-lived components such as the reconciliation job take one of these
instead of a repository, so no connection outlives a single sweep.
"""
