"""Catalog domain: entities, value objects, events and specifications."""

from __future__ import annotations

from .category import ProductCategory
from .content_type import ALLOWED_IMAGE_TYPES, ContentType, is_valid_image_type
from .events import StoredImageDeletionRequested
from .image import Image
from .money import DEFAULT_CURRENCY, Money
from .product import Product
from .specifications import (
    ImageIdInSpecification,
    ImagesReadyForCleanupSpecification,
    ProductByCategoryIdSpecification,
    ProductCategoryCodeSpecification,
    ProductCategoryIdSpecification,
    ProductIdSpecification,
    StaleImageSpecification,
    UnreferencedImageSpecification,
)

__all__ = [
    "ALLOWED_IMAGE_TYPES",
    "DEFAULT_CURRENCY",
    "ContentType",
    "Image",
    "ImageIdInSpecification",
    "ImagesReadyForCleanupSpecification",
    "Money",
    "Product",
    "ProductByCategoryIdSpecification",
    "ProductCategory",
    "ProductCategoryCodeSpecification",
    "ProductCategoryIdSpecification",
    "ProductIdSpecification",
    "StaleImageSpecification",
    "StoredImageDeletionRequested",
    "UnreferencedImageSpecification",
    "is_valid_image_type",
]
