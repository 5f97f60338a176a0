"""SQLAlchemyCatalogRepository — ``ICatalogRepository`` over an AsyncSession."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, exists, or_, select
from sqlalchemy.exc import SQLAlchemyError

from riber_catalog.domain.specifications import (
    ImagesReadyForCleanupSpecification,
    StaleImageSpecification,
)
from riber_specifications import AndSpecification, TenantSpecification

from .exceptions import RepositoryError
from .mappers import (
    category_from_model,
    category_to_model,
    image_from_model,
    image_to_model,
    product_from_model,
    product_to_model,
)
from .models import ImageModel, ProductCategoryModel, ProductModel
from .specifications.compiler import build_sqla_filter
from .uow import SQLAlchemyUnitOfWork

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from riber_catalog.domain import Image, Product, ProductCategory
    from riber_core.domain.specification import ISpecification

    from .specifications.strategy import SQLAlchemyOperatorRegistry

logger = logging.getLogger("riber.persistence.sqlalchemy")


class SQLAlchemyCatalogRepository:
    """
    Catalog repository bound to one :class:`SQLAlchemyUnitOfWork`.

    Specifications are translated with :func:`build_sqla_filter`, so any
    specification whose ``to_dict()`` names catalog columns can be used
    for lookups. Tenant scoping is added here, not by callers.
    Writes are added to the unit of work's session and become visible
    to other sessions only on commit.
    """

    def __init__(
        self,
        uow: SQLAlchemyUnitOfWork,
        *,
        grace_period: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] | None = None,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        self._uow = uow
        self.grace_period = grace_period
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._registry = registry

    def _where(self, model: type[Any], specification: ISpecification[Any]) -> Any:
        return build_sqla_filter(model, specification.to_dict(), registry=self._registry)

    # ── Reads ────────────────────────────────────────────────────

    async def find_category(
        self, specification: ISpecification[ProductCategory], tenant_id: UUID
    ) -> ProductCategory | None:
        scoped = AndSpecification(specification, TenantSpecification(tenant_id))
        stmt = (
            select(ProductCategoryModel)
            .where(self._where(ProductCategoryModel, scoped))
            .limit(1)
        )
        try:
            row = (await self._uow.session.execute(stmt)).scalars().first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Category lookup failed: {e}") from e
        return category_from_model(row) if row is not None else None

    async def find_products(
        self, specification: ISpecification[Product], tenant_id: UUID
    ) -> list[Product]:
        scoped = AndSpecification(specification, TenantSpecification(tenant_id))
        stmt = select(ProductModel).where(self._where(ProductModel, scoped))
        try:
            rows = (await self._uow.session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Product lookup failed: {e}") from e
        return [product_from_model(row) for row in rows]

    async def find_images(self, specification: ISpecification[Image]) -> list[Image]:
        stmt = select(ImageModel).where(self._where(ImageModel, specification))
        try:
            rows = (await self._uow.session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Image lookup failed: {e}") from e
        return [image_from_model(row) for row in rows]

    async def list_unreferenced_images(self) -> list[Image]:
        cutoff = self._clock() - self.grace_period
        unreferenced = and_(
            self._where(ImageModel, StaleImageSpecification(cutoff)),
            ~exists().where(ProductModel.image_id == ImageModel.id),
        )
        stmt = select(ImageModel).where(
            or_(self._where(ImageModel, ImagesReadyForCleanupSpecification()), unreferenced)
        )
        try:
            rows = (await self._uow.session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Cleanup candidate query failed: {e}") from e
        logger.debug("Found %d image cleanup candidates", len(rows))
        return [image_from_model(row) for row in rows]

    # ── Writes ───────────────────────────────────────────────────

    async def create_category(self, category: ProductCategory) -> None:
        self._uow.session.add(category_to_model(category))

    async def create_image(self, image: Image) -> None:
        self._uow.session.add(image_to_model(image))

    async def create_product(self, product: Product) -> None:
        self._uow.session.add(product_to_model(product))


@asynccontextmanager
async def catalog_repository_scope(
    session_factory: Callable[[], AsyncSession], **options: Any
) -> AsyncIterator[SQLAlchemyCatalogRepository]:
    """A repository on its own self-managed session, closed on exit.

    *options* are passed to :class:`SQLAlchemyCatalogRepository`. Bind the
    factory to get a ``CatalogRepositoryScope``::

        job = ImageReconciliationJob(
            functools.partial(catalog_repository_scope, session_factory), storage
        )
    """
    async with SQLAlchemyUnitOfWork(session_factory=session_factory) as uow:
        yield SQLAlchemyCatalogRepository(uow, **options)
