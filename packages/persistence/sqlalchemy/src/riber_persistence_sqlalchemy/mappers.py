"""Domain entity <-> ORM row conversion."""

from __future__ import annotations

from datetime import datetime, timezone

from riber_catalog.domain import ContentType, Image, Money, Product, ProductCategory

from .exceptions import RepositoryError
from .models import ImageModel, ProductCategoryModel, ProductModel


def _utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite returns them naive)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def category_to_model(category: ProductCategory) -> ProductCategoryModel:
    return ProductCategoryModel(
        id=category.id,
        name=category.name,
        description=category.description,
        code=category.code,
        company_id=category.company_id,
        is_active=category.is_active,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


def category_from_model(row: ProductCategoryModel) -> ProductCategory:
    return ProductCategory(
        id=row.id,
        name=row.name,
        description=row.description,
        code=row.code,
        company_id=row.company_id,
        is_active=row.is_active,
        created_at=_utc(row.created_at),
        updated_at=_utc(row.updated_at),
    )


def image_to_model(image: Image) -> ImageModel:
    return ImageModel(
        id=image.id,
        length=image.length,
        original_name=image.original_name,
        extension=image.extension,
        content_type=image.content_type.value,
        should_delete=image.should_delete,
        marked_for_deletion_at=image.marked_for_deletion_at,
        deleted_at=image.deleted_at,
        created_at=image.created_at,
        updated_at=image.updated_at,
    )


def image_from_model(row: ImageModel) -> Image:
    return Image(
        id=row.id,
        length=row.length,
        original_name=row.original_name,
        extension=row.extension,
        content_type=ContentType(value=row.content_type),
        should_delete=row.should_delete,
        marked_for_deletion_at=_utc(row.marked_for_deletion_at),
        deleted_at=_utc(row.deleted_at),
        created_at=_utc(row.created_at),
        updated_at=_utc(row.updated_at),
    )


def product_to_model(product: Product) -> ProductModel:
    return ProductModel(
        id=product.id,
        name=product.name,
        description=product.description,
        unit_price=product.unit_price.amount,
        currency=product.unit_price.currency,
        category_id=product.category_id,
        company_id=product.company_id,
        image_id=product.image_id,
        is_active=product.is_active,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def product_from_model(row: ProductModel) -> Product:
    try:
        price = Money(amount=row.unit_price, currency=row.currency)
    except Exception as e:  # noqa: BLE001
        raise RepositoryError(f"Stored price of product {row.id} is invalid: {e}") from e
    return Product(
        id=row.id,
        name=row.name,
        description=row.description,
        unit_price=price,
        category_id=row.category_id,
        company_id=row.company_id,
        image_id=row.image_id,
        is_active=row.is_active,
        created_at=_utc(row.created_at),
        updated_at=_utc(row.updated_at),
    )
