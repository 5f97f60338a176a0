"""Catalog query predicates.

Every class here is a regular specification: evaluable in memory and
translatable through its ``to_dict()`` form by any query layer.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import Any
from uuid import UUID

from riber_specifications import BaseSpecification, KeySpecification, SpecificationOperator

from .category import ProductCategory
from .image import Image
from .product import Product


class ProductCategoryIdSpecification(KeySpecification[ProductCategory]):
    def __init__(self, category_id: UUID) -> None:
        super().__init__("id", category_id)


class ProductCategoryCodeSpecification(KeySpecification[ProductCategory]):
    """Exact, case-sensitive match on the stored (upper-cased) code.

    Callers holding user input normalise it the way
    :meth:`ProductCategory.create` does before building this.
    """

    def __init__(self, code: str) -> None:
        super().__init__("code", code)


class ProductIdSpecification(KeySpecification[Product]):
    def __init__(self, product_id: UUID) -> None:
        super().__init__("id", product_id)


class ProductByCategoryIdSpecification(KeySpecification[Product]):
    def __init__(self, category_id: UUID) -> None:
        super().__init__("category_id", category_id)


class ImagesReadyForCleanupSpecification(BaseSpecification[Image]):
    """Marked for deletion (flag and timestamp) and not soft-deleted."""

    def is_satisfied_by(self, candidate: Image) -> bool:
        return (
            candidate.should_delete is True
            and candidate.marked_for_deletion_at is not None
            and candidate.deleted_at is None
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": SpecificationOperator.AND.value,
            "conditions": [
                {"op": SpecificationOperator.EQ.value, "attr": "should_delete", "val": True},
                {
                    "op": SpecificationOperator.IS_NOT_NULL.value,
                    "attr": "marked_for_deletion_at",
                },
                {"op": SpecificationOperator.IS_NULL.value, "attr": "deleted_at"},
            ],
        }


class ImageIdInSpecification(BaseSpecification[Image]):
    def __init__(self, image_ids: Collection[UUID]) -> None:
        self.image_ids = frozenset(image_ids)

    def is_satisfied_by(self, candidate: Image) -> bool:
        return candidate.id in self.image_ids

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": SpecificationOperator.IN.value,
            "attr": "id",
            "val": sorted(self.image_ids, key=str),
        }


class StaleImageSpecification(BaseSpecification[Image]):
    """Created before *created_before* and not soft-deleted."""

    def __init__(self, created_before: datetime) -> None:
        self.created_before = created_before

    def is_satisfied_by(self, candidate: Image) -> bool:
        return candidate.created_at < self.created_before and candidate.deleted_at is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": SpecificationOperator.AND.value,
            "conditions": [
                {
                    "op": SpecificationOperator.LT.value,
                    "attr": "created_at",
                    "val": self.created_before,
                },
                {"op": SpecificationOperator.IS_NULL.value, "attr": "deleted_at"},
            ],
        }


class UnreferencedImageSpecification(StaleImageSpecification):
    """Stale, and not referenced by any of *referenced_ids*.

    The cutoff keeps images of flows still in flight out of the sweep.
    SQL stores express "unreferenced" as a correlated ``NOT EXISTS``
    instead of materialising the id list.
    """

    def __init__(self, referenced_ids: Collection[UUID], created_before: datetime) -> None:
        super().__init__(created_before)
        self.referenced_ids = frozenset(referenced_ids)

    def is_satisfied_by(self, candidate: Image) -> bool:
        return candidate.id not in self.referenced_ids and super().is_satisfied_by(
            candidate
        )

    def to_dict(self) -> dict[str, Any]:
        stale = super().to_dict()
        return {
            "op": SpecificationOperator.AND.value,
            "conditions": [
                {
                    "op": SpecificationOperator.NOT_IN.value,
                    "attr": "id",
                    "val": sorted(self.referenced_ids, key=str),
                },
                *stale["conditions"],
            ],
        }
