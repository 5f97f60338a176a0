"""Catalog-specific exceptions."""

from __future__ import annotations

from riber_core.primitives.exceptions import (
    EntityNotFoundError,
    InvariantViolationError,
    StorageError,
)


class CategoryNotFoundError(EntityNotFoundError):
    """Raised when a product references a category the tenant does not own."""

    def __init__(self, category_id: object) -> None:
        super().__init__("ProductCategory", category_id)


class InvalidImageError(InvariantViolationError):
    """Raised when image metadata is unusable (size, name, extension)."""


class InvalidContentTypeError(InvariantViolationError):
    """Raised for content types outside the allowed image types."""


class InvalidMoneyError(InvariantViolationError):
    """Raised for negative amounts, non-positive prices or currency mismatches."""


class ProductInvariantError(InvariantViolationError):
    """Raised when product or category data breaks an entity invariant."""


class ImageUploadError(StorageError):
    """Raised by storage adapters when an upload fails."""


class ImageDeletionError(StorageError):
    """Raised by storage adapters when a delete fails for a reason other than absence."""
