"""Shared fixtures for the SQLAlchemy catalog adapter tests."""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from riber_catalog.domain import Image, Product, ProductCategory
from riber_persistence_sqlalchemy import (
    CatalogBase,
    SQLAlchemyCatalogRepository,
    SQLAlchemyUnitOfWork,
)


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(CatalogBase.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as sess:
        yield sess


@pytest.fixture
def uow(session: AsyncSession) -> SQLAlchemyUnitOfWork:
    return SQLAlchemyUnitOfWork(session=session)


@pytest.fixture
def repository(uow: SQLAlchemyUnitOfWork) -> SQLAlchemyCatalogRepository:
    return SQLAlchemyCatalogRepository(uow)


@pytest.fixture
def tenant_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def seed(session_factory: async_sessionmaker[AsyncSession]):
    """Insert entities in their own committed transaction."""

    async def _seed(*entities: object) -> None:
        async with SQLAlchemyUnitOfWork(session_factory=session_factory) as seed_uow:
            repo = SQLAlchemyCatalogRepository(seed_uow)
            for entity in entities:
                if isinstance(entity, ProductCategory):
                    await repo.create_category(entity)
                elif isinstance(entity, Image):
                    await repo.create_image(entity)
                elif isinstance(entity, Product):
                    await repo.create_product(entity)
            await seed_uow.save_changes()

    return _seed
