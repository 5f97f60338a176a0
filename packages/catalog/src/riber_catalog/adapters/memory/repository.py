"""InMemoryCatalogRepository — dict-backed catalog fake with staged writes."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from riber_specifications import TenantSpecification

from ...domain.category import ProductCategory
from ...domain.image import Image
from ...domain.product import Product
from ...domain.specifications import (
    ImagesReadyForCleanupSpecification,
    UnreferencedImageSpecification,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable
    from uuid import UUID

    from riber_core.domain.specification import ISpecification

CatalogEntity = ProductCategory | Image | Product


class InMemoryCatalogRepository:
    """In-memory implementation of ``ICatalogRepository``.

    ``create_*`` calls are staged and only become committed state when
    :meth:`apply_pending` runs (the unit of work does that on commit).
    Reads inside the transaction see committed rows plus staged ones.

    ``fail_on_create_image`` / ``fail_on_create_product`` make the next
    matching call raise, for exercising failure paths.
    """

    def __init__(
        self,
        *,
        grace_period: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.categories: dict[UUID, ProductCategory] = {}
        self.images: dict[UUID, Image] = {}
        self.products: dict[UUID, Product] = {}
        self.grace_period = grace_period
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._pending: list[CatalogEntity] = []
        self.fail_on_create_image: BaseException | None = None
        self.fail_on_create_product: BaseException | None = None
        self.scopes_opened = 0

    # ── Reads ────────────────────────────────────────────────────

    async def find_category(
        self, specification: ISpecification[ProductCategory], tenant_id: UUID
    ) -> ProductCategory | None:
        scoped = TenantSpecification(tenant_id)
        for category in self._visible(self.categories, ProductCategory):
            if scoped.is_satisfied_by(category) and specification.is_satisfied_by(
                category
            ):
                return category
        return None

    async def find_products(
        self, specification: ISpecification[Product], tenant_id: UUID
    ) -> list[Product]:
        scoped = TenantSpecification(tenant_id)
        return [
            product
            for product in self._visible(self.products, Product)
            if scoped.is_satisfied_by(product) and specification.is_satisfied_by(product)
        ]

    async def find_images(self, specification: ISpecification[Image]) -> list[Image]:
        return [
            image
            for image in self._visible(self.images, Image)
            if specification.is_satisfied_by(image)
        ]

    async def list_unreferenced_images(self) -> list[Image]:
        referenced = {p.image_id for p in self.products.values() if p.image_id}
        cutoff = self._clock() - self.grace_period
        spec = ImagesReadyForCleanupSpecification() | UnreferencedImageSpecification(
            referenced, cutoff
        )
        return [image for image in self.images.values() if spec.is_satisfied_by(image)]

    # ── Writes ───────────────────────────────────────────────────

    async def create_category(self, category: ProductCategory) -> None:
        self._pending.append(category)

    async def create_image(self, image: Image) -> None:
        if self.fail_on_create_image is not None:
            raise self.fail_on_create_image
        self._pending.append(image)

    async def create_product(self, product: Product) -> None:
        if self.fail_on_create_product is not None:
            raise self.fail_on_create_product
        self._pending.append(product)

    # ── Transaction support ──────────────────────────────────────

    @asynccontextmanager
    async def scope(self) -> AsyncIterator[InMemoryCatalogRepository]:
        """``CatalogRepositoryScope`` over this repository; counts entries."""
        self.scopes_opened += 1
        yield self

    @property
    def pending(self) -> list[CatalogEntity]:
        return list(self._pending)

    def apply_pending(self) -> None:
        for entity in self._pending:
            self._store_for(entity)[entity.id] = entity
        self._pending.clear()

    def discard_pending(self) -> None:
        self._pending.clear()

    def seed(self, *entities: CatalogEntity) -> None:
        """Insert committed rows directly (test setup)."""
        for entity in entities:
            self._store_for(entity)[entity.id] = entity

    def _store_for(self, entity: CatalogEntity) -> dict:
        if isinstance(entity, ProductCategory):
            return self.categories
        if isinstance(entity, Image):
            return self.images
        return self.products

    def _visible(self, store: dict, kind: type) -> list:
        staged = [e for e in self._pending if isinstance(e, kind)]
        return [*store.values(), *staged]
