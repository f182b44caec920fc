"""Shared fixtures: in-memory database, catalog service and sample records."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from comfy.catalog.models import BrandModel, CategoryModel, ProductModel
from comfy.catalog.references import ReferenceMaintainer
from comfy.catalog.service import CatalogService, ProductDraft
from comfy.infrastructure.database import Base


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory database with all tables."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test database."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def fetch(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[type, str], Awaitable[Any]]:
    """Load a record through a fresh session, bypassing cached state."""

    async def _fetch(model: type, record_id: str) -> Any:
        async with session_factory() as fresh:
            return await fresh.get(model, record_id)

    return _fetch


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def service(
    session: AsyncSession,
    session_factory: async_sessionmaker[AsyncSession],
) -> CatalogService:
    """Create catalog service running reference maintenance inline."""
    return CatalogService(session, ReferenceMaintainer(session_factory))


@pytest_asyncio.fixture
async def brand(service: CatalogService) -> BrandModel:
    """Create a brand."""
    return await service.create_brand("Nordhaus")


@pytest_asyncio.fixture
async def other_brand(service: CatalogService) -> BrandModel:
    """Create a second brand."""
    return await service.create_brand("Lindqvist")


@pytest_asyncio.fixture
async def category(service: CatalogService) -> CategoryModel:
    """Create a category."""
    return await service.create_category("Chairs")


@pytest_asyncio.fixture
async def other_category(service: CatalogService) -> CategoryModel:
    """Create a second category."""
    return await service.create_category("Tables")


@pytest.fixture
def make_product(
    service: CatalogService,
    brand: BrandModel,
    category: CategoryModel,
) -> Callable[..., Awaitable[ProductModel]]:
    """Factory for products assigned to the default brand and category."""

    async def _make(
        name: str = "Oak Chair",
        price: float = 50,
        brand_id: str | None = None,
        category_id: str | None = None,
        **fields: Any,
    ) -> ProductModel:
        return await service.add_product(
            ProductDraft(
                name=name,
                price=price,
                brand=brand_id or brand.id,
                category=category_id or category.id,
                **fields,
            )
        )

    return _make
