"""riber-catalog — product catalog with saga-backed image provisioning."""

from __future__ import annotations

from .config import CatalogSettings
from .domain import (
    ContentType,
    Image,
    ImageIdInSpecification,
    ImagesReadyForCleanupSpecification,
    Money,
    Product,
    ProductByCategoryIdSpecification,
    ProductCategory,
    ProductCategoryCodeSpecification,
    ProductCategoryIdSpecification,
    ProductIdSpecification,
    StaleImageSpecification,
    StoredImageDeletionRequested,
    UnreferencedImageSpecification,
)
from .exceptions import (
    CategoryNotFoundError,
    ImageDeletionError,
    ImageUploadError,
    InvalidContentTypeError,
    InvalidImageError,
    InvalidMoneyError,
    ProductInvariantError,
)
from .ports import ICatalogRepository, IImageStorage
from .provisioning import (
    CreateProductCommand,
    CreateProductCommandValidator,
    DeleteStoredImageHandler,
    ImageAttachment,
    ProductProvisioningSaga,
    ProvisioningState,
    ProvisioningStep,
    register_compensation,
)
from .reconciliation import (
    ImageReconciliationJob,
    ImageReconciliationWorker,
    ReconciliationSummary,
)

__all__ = [
    "CatalogSettings",
    "CategoryNotFoundError",
    "ContentType",
    "CreateProductCommand",
    "CreateProductCommandValidator",
    "DeleteStoredImageHandler",
    "ICatalogRepository",
    "IImageStorage",
    "Image",
    "ImageAttachment",
    "ImageDeletionError",
    "ImageReconciliationJob",
    "ImageReconciliationWorker",
    "ImageUploadError",
    "ImageIdInSpecification",
    "ImagesReadyForCleanupSpecification",
    "InvalidContentTypeError",
    "InvalidImageError",
    "InvalidMoneyError",
    "Money",
    "Product",
    "ProductByCategoryIdSpecification",
    "ProductCategory",
    "ProductCategoryCodeSpecification",
    "ProductCategoryIdSpecification",
    "ProductIdSpecification",
    "ProductInvariantError",
    "ProductProvisioningSaga",
    "ProvisioningState",
    "ProvisioningStep",
    "ReconciliationSummary",
    "StaleImageSpecification",
    "StoredImageDeletionRequested",
    "UnreferencedImageSpecification",
    "register_compensation",
]
