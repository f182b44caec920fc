"""Repositories for catalog database operations.

Provides product queries with filtering and sorting, and brand/category
access including push/pull on their embedded product-id lists.
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from comfy.catalog.models import BrandModel, CategoryModel, ProductModel

OwnerT = TypeVar("OwnerT", BrandModel, CategoryModel)


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            products = await repo.find_all(
                conditions=[ProductModel.price <= 100],
                sort_direction=1,
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, product: ProductModel) -> ProductModel:
        """Insert a product and assign its id.

        Args:
            product: Product to save.

        Returns:
            Saved product.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def save_all(self, products: list[ProductModel]) -> list[ProductModel]:
        """Save multiple products to database."""
        self.session.add_all(products)
        await self.session.flush()
        return products

    async def get_by_id(
        self,
        product_id: str,
        resolve_references: bool = False,
    ) -> ProductModel | None:
        """Get product by ID.

        Args:
            product_id: Product ID.
            resolve_references: Whether to eagerly load brand and category.

        Returns:
            Product if found, None otherwise.
        """
        query = select(ProductModel).where(ProductModel.id == product_id)

        if resolve_references:
            query = query.options(
                selectinload(ProductModel.brand),
                selectinload(ProductModel.category),
            ).execution_options(populate_existing=True)

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def find_all(
        self,
        conditions: Sequence[ColumnElement[bool]] = (),
        sort_direction: int | None = None,
        resolve_references: bool = False,
    ) -> Sequence[ProductModel]:
        """Find every product matching the conditions.

        Args:
            conditions: Filter conditions, combined with AND.
            sort_direction: 1 for price ascending, -1 for price descending,
                None for natural (insertion) order.
            resolve_references: Whether to eagerly load brand and category.

        Returns:
            Sequence of matching products.
        """
        query = select(ProductModel).where(*conditions)
        query = query.order_by(*self._ordering(sort_direction))

        if resolve_references:
            query = query.options(
                selectinload(ProductModel.brand),
                selectinload(ProductModel.category),
            ).execution_options(populate_existing=True)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def find_price_extreme(
        self,
        conditions: Sequence[ColumnElement[bool]],
        sort_direction: int,
    ) -> float | None:
        """Get the first price of the matching products in a price ordering.

        Args:
            conditions: Filter conditions, combined with AND.
            sort_direction: 1 for the lowest price, -1 for the highest.

        Returns:
            The price, or None when nothing matches.
        """
        query = (
            select(ProductModel.price)
            .where(*conditions)
            .order_by(*self._ordering(sort_direction))
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def delete_by_id(self, product_id: str) -> int:
        """Delete a product.

        Args:
            product_id: Product ID.

        Returns:
            Number of deleted products (0 or 1).
        """
        result = await self.session.execute(
            delete(ProductModel).where(ProductModel.id == product_id)
        )
        return result.rowcount or 0

    def _ordering(self, sort_direction: int | None) -> list[Any]:
        """Get ORDER BY clauses for a sort direction.

        Args:
            sort_direction: 1, -1 or None.

        Returns:
            Ordering clauses; insertion order breaks ties.
        """
        natural = [ProductModel.created_at.asc(), ProductModel.id.asc()]
        if sort_direction == 1:
            return [ProductModel.price.asc(), *natural]
        if sort_direction == -1:
            return [ProductModel.price.desc(), *natural]
        return natural


class ReferenceListRepository(Generic[OwnerT]):
    """Repository for records that embed a list of product ids.

    Brands keep theirs in ``products`` and categories in ``products_id``;
    subclasses name the model and the list attribute.
    """

    model: type[OwnerT]
    list_attribute: str

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def get_by_id(self, owner_id: str) -> OwnerT | None:
        """Get record by ID."""
        return await self.session.get(self.model, owner_id)

    async def exists(self, owner_id: str) -> bool:
        """Check whether a record exists."""
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == owner_id)
        )
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> Sequence[OwnerT]:
        """List all records in insertion order."""
        result = await self.session.execute(
            select(self.model).order_by(self.model.created_at.asc(), self.model.id.asc())
        )
        return result.scalars().all()

    async def save(self, record: OwnerT) -> OwnerT:
        """Insert a record and assign its id."""
        self.session.add(record)
        await self.session.flush()
        return record

    async def _get_for_update(self, owner_id: str) -> OwnerT | None:
        """Load the current row, locked where the database supports it."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == owner_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def push_product(self, owner_id: str, product_id: str) -> int:
        """Add a product id to the record's list unless already present.

        The write is checked against the row version read here, so a
        concurrent change to the same record raises ``StaleDataError``
        on flush instead of being overwritten.

        Args:
            owner_id: Brand or category ID.
            product_id: Product ID to add.

        Returns:
            Number of matched records (0 or 1).
        """
        record = await self._get_for_update(owner_id)
        if record is None:
            return 0

        current = list(getattr(record, self.list_attribute) or [])
        if product_id not in current:
            setattr(record, self.list_attribute, [*current, product_id])
            await self.session.flush()
        return 1

    async def pull_product(self, owner_id: str, product_id: str) -> int:
        """Remove every occurrence of a product id from the record's list.

        Version-checked like ``push_product``.

        Args:
            owner_id: Brand or category ID.
            product_id: Product ID to remove.

        Returns:
            Number of matched records (0 or 1).
        """
        record = await self._get_for_update(owner_id)
        if record is None:
            return 0

        current = list(getattr(record, self.list_attribute) or [])
        remaining = [pid for pid in current if pid != product_id]
        if len(remaining) != len(current):
            setattr(record, self.list_attribute, remaining)
            await self.session.flush()
        return 1


class BrandRepository(ReferenceListRepository[BrandModel]):
    """Repository for Brand database operations."""

    model = BrandModel
    list_attribute = "products"


class CategoryRepository(ReferenceListRepository[CategoryModel]):
    """Repository for Category database operations."""

    model = CategoryModel
    list_attribute = "products_id"
