"""Shared fixtures for catalog tests."""

from __future__ import annotations

import uuid
from typing import Any

import pytest

from riber_catalog.adapters.memory import (
    InMemoryCatalogRepository,
    InMemoryCatalogUnitOfWork,
    InMemoryImageStorage,
)
from riber_catalog.domain import ProductCategory
from riber_catalog.provisioning import (
    CreateProductCommand,
    ImageAttachment,
    ProductProvisioningSaga,
)
from riber_core.domain.events import DomainEvent


class RecordingPublisher:
    """IEventPublisher that keeps published events instead of delivering them."""

    def __init__(self) -> None:
        self.events: list[DomainEvent] = []
        self.fail_with: BaseException | None = None

    async def publish(self, event: DomainEvent) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.events.append(event)


@pytest.fixture
def tenant_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def uow(repository: InMemoryCatalogRepository) -> InMemoryCatalogUnitOfWork:
    return InMemoryCatalogUnitOfWork(repository)


@pytest.fixture
def storage() -> InMemoryImageStorage:
    return InMemoryImageStorage()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def category(
    repository: InMemoryCatalogRepository, tenant_id: uuid.UUID
) -> ProductCategory:
    category = ProductCategory.create("Beverages", "Hot and cold", "bev", tenant_id)
    repository.seed(category)
    return category


@pytest.fixture
def saga(
    repository: InMemoryCatalogRepository,
    uow: InMemoryCatalogUnitOfWork,
    storage: InMemoryImageStorage,
    publisher: RecordingPublisher,
    tenant_id: uuid.UUID,
) -> ProductProvisioningSaga:
    return ProductProvisioningSaga(
        repository, uow, storage, publisher, tenant_provider=lambda: tenant_id
    )


@pytest.fixture
def make_command(category: ProductCategory):
    def _make(*, with_image: bool = False, **overrides: Any) -> CreateProductCommand:
        data: dict[str, Any] = {
            "name": "Espresso",
            "description": "Double shot",
            "price": "12.50",
            "category_id": category.id,
        }
        if with_image:
            data["image"] = ImageAttachment(
                content=b"\x89PNG-bytes", file_name="espresso.png", content_type="image/png"
            )
        data.update(overrides)
        return CreateProductCommand(**data)

    return _make
