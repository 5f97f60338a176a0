"""riber-persistence-sqlalchemy — async SQLAlchemy adapter for the catalog."""

from __future__ import annotations

from .exceptions import (
    RepositoryError,
    SessionManagementError,
    SQLAlchemyPersistenceError,
    UnitOfWorkError,
)
from .models import CatalogBase, ImageModel, ProductCategoryModel, ProductModel
from .repository import SQLAlchemyCatalogRepository, catalog_repository_scope
from .specifications import (
    DEFAULT_SQLA_REGISTRY,
    SQLAlchemyOperator,
    SQLAlchemyOperatorRegistry,
    build_default_sqla_registry,
    build_sqla_filter,
)
from .uow import SQLAlchemyUnitOfWork

__all__ = [
    "CatalogBase",
    "DEFAULT_SQLA_REGISTRY",
    "ImageModel",
    "ProductCategoryModel",
    "ProductModel",
    "RepositoryError",
    "SQLAlchemyCatalogRepository",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "SQLAlchemyPersistenceError",
    "SQLAlchemyUnitOfWork",
    "SessionManagementError",
    "UnitOfWorkError",
    "build_default_sqla_registry",
    "build_sqla_filter",
    "catalog_repository_scope",
]
