"""Catalog service for product operations.

High-level service that combines repository operations with the
catalog rules: listing with filters, price sort and min/max price,
lookup with resolved references, search, and product mutations that
keep brand/category product lists in step.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

import structlog
from fastapi import BackgroundTasks
from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from comfy.catalog.models import BrandModel, CategoryModel, ProductModel
from comfy.catalog.pagination import Page, paginate
from comfy.catalog.references import Assignment, ReferenceMaintainer
from comfy.catalog.repository import BrandRepository, CategoryRepository, ProductRepository
from comfy.domain.exceptions import (
    BrandNotFoundError,
    CategoryNotFoundError,
    InvalidSearchPatternError,
    ProductNotFoundError,
)

logger = structlog.get_logger()

# Filter value meaning "no constraint on this field"
ALL = "all"

SORT_DIRECTIONS = (1, -1)


# ============================================================================
# Inputs
# ============================================================================


@dataclass
class ProductFilter:
    """Filter parameters for the product listing.

    Attributes:
        price: Upper price bound; None or 0 means unbounded.
        brand: Brand ID; None or "all" means any brand.
        category: Category ID; None or "all" means any category.
    """

    price: float | None = None
    brand: str | None = None
    category: str | None = None

    def conditions(self) -> list[ColumnElement[bool]]:
        """Build filter conditions for the repository."""
        conditions: list[ColumnElement[bool]] = []

        if self.price:
            conditions.append(ProductModel.price <= self.price)

        if self.brand and self.brand != ALL:
            conditions.append(ProductModel.brand_id == self.brand)

        if self.category and self.category != ALL:
            conditions.append(ProductModel.category_id == self.category)

        return conditions


@dataclass
class ProductDraft:
    """Fields of a product to create."""

    name: str
    price: float
    brand: str
    category: str
    description: str = ""
    discount: float = 0
    stock: int = 0
    colors: list[str] = field(default_factory=list)


@dataclass
class ProductChanges:
    """Fields of a product to update; None means unchanged."""

    product_id: str
    name: str | None = None
    description: str | None = None
    price: float | None = None
    discount: float | None = None
    stock: int | None = None
    brand: str | None = None
    category: str | None = None
    colors: list[str] | None = None

    def provided(self) -> dict[str, Any]:
        """Get the provided fields keyed by model attribute."""
        values = {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "discount": self.discount,
            "stock": self.stock,
            "brand_id": self.brand,
            "category_id": self.category,
            "colors": unique_colors(self.colors) if self.colors is not None else None,
        }
        return {key: value for key, value in values.items() if value is not None}


# ============================================================================
# Results
# ============================================================================


@dataclass
class ProductListing:
    """Result of listing products.

    Attributes:
        page: Requested page of matching products.
        min_price: Lowest price across all matching products (0 if none).
        max_price: Highest price across all matching products (0 if none).
    """

    page: Page[ProductModel]
    min_price: float
    max_price: float


@dataclass
class UpdateResult:
    """Acknowledgment of a product update."""

    matched_count: int
    modified_count: int
    acknowledged: bool = True


@dataclass
class DeleteResult:
    """Acknowledgment of a product delete."""

    deleted_count: int
    acknowledged: bool = True


# ============================================================================
# Helpers
# ============================================================================


def unique_colors(colors: list[str]) -> list[str]:
    """Drop duplicate colors, keeping first-seen order."""
    return list(dict.fromkeys(colors))


def parse_sort(value: str | None) -> int | None:
    """Map a raw sort parameter to a price sort direction.

    Any value equal to 1 or -1 as a number ("1", "-1", "1.0") selects a
    direction; anything else, including non-numeric text, means natural
    order.
    """
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return int(number) if number in SORT_DIRECTIONS else None


def image_entries(paths: list[str]) -> list[dict[str, str]]:
    """Map stored upload paths to image entries, preserving order."""
    return [{"src": path} for path in paths]


def compile_search(query: str | None) -> re.Pattern[str]:
    """Compile a case-insensitive search pattern.

    Args:
        query: Search text, treated as a regular expression. Empty or
            None matches everything.

    Returns:
        Compiled pattern.

    Raises:
        InvalidSearchPatternError: If the query is not a valid pattern.
    """
    try:
        return re.compile(query or "", re.IGNORECASE)
    except re.error as e:
        raise InvalidSearchPatternError(query or "", str(e)) from e


def matches_search(product: ProductModel, pattern: re.Pattern[str]) -> bool:
    """Check product name, category name and brand name against a pattern.

    Unresolved references never match.
    """
    candidates = [product.name]
    if product.category is not None:
        candidates.append(product.category.name)
    if product.brand is not None:
        candidates.append(product.brand.name)
    return any(pattern.search(text or "") for text in candidates)


# ============================================================================
# Service
# ============================================================================


class CatalogService:
    """Service for catalog operations.

    Reference list maintenance is scheduled on ``background_tasks`` when
    given, so it runs after the response is sent. Without it the
    maintenance is awaited inline.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(session, ReferenceMaintainer(async_session_factory))

            listing = await service.list_products(
                ProductFilter(price=100, brand=brand_id),
                sort=1,
                page=1,
            )
    """

    def __init__(
        self,
        session: AsyncSession,
        references: ReferenceMaintainer,
        background_tasks: BackgroundTasks | None = None,
    ) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
            references: Maintainer for brand/category product lists.
            background_tasks: Optional scheduler for reference maintenance.
        """
        self.session = session
        self.products = ProductRepository(session)
        self.brands = BrandRepository(session)
        self.categories = CategoryRepository(session)
        self.references = references
        self.background_tasks = background_tasks

    async def _dispatch(
        self,
        func: Callable[..., Awaitable[None]],
        *args: Any,
    ) -> None:
        """Schedule reference maintenance, or run it now without a scheduler."""
        if self.background_tasks is not None:
            self.background_tasks.add_task(func, *args)
        else:
            await func(*args)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_products(
        self,
        filters: ProductFilter,
        sort: int | None = None,
        page: int = 1,
    ) -> ProductListing:
        """List products with filters, optional price sort and pagination.

        All matching products are loaded and the page is sliced in
        memory. Min/max price cover the whole matching set.

        Args:
            filters: Filter parameters.
            sort: 1 for price ascending, -1 for descending, anything
                else for natural order.
            page: Page number (1-indexed).

        Returns:
            Page of products with min/max price.
        """
        conditions = filters.conditions()
        direction = sort if sort in SORT_DIRECTIONS else None

        products = await self.products.find_all(conditions, sort_direction=direction)

        if direction is not None:
            if products:
                first, last = products[0].price, products[-1].price
            else:
                first = last = 0
            min_price, max_price = (first, last) if direction == 1 else (last, first)
        else:
            min_price = await self.products.find_price_extreme(conditions, 1) or 0
            max_price = await self.products.find_price_extreme(conditions, -1) or 0

        return ProductListing(
            page=paginate(products, page),
            min_price=min_price,
            max_price=max_price,
        )

    async def get_product(self, product_id: str) -> ProductModel:
        """Get product by ID with brand and category resolved.

        Raises:
            ProductNotFoundError: If no product has this ID.
        """
        product = await self.products.get_by_id(product_id, resolve_references=True)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def search_products(self, query: str | None, page: int = 1) -> Page[ProductModel]:
        """Search products by product, brand or category name.

        Args:
            query: Case-insensitive pattern; empty matches everything.
            page: Page number (1-indexed).

        Returns:
            Page of matching products.
        """
        pattern = compile_search(query)
        products = await self.products.find_all(resolve_references=True)
        matches = [product for product in products if matches_search(product, pattern)]
        return paginate(matches, page)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_product(
        self,
        draft: ProductDraft,
        image_paths: list[str] | None = None,
    ) -> ProductModel:
        """Create a product and add it to its brand and category.

        Args:
            draft: Product fields.
            image_paths: Stored paths of uploaded images, in upload order.

        Returns:
            Created product.

        Raises:
            BrandNotFoundError: If the brand does not exist.
            CategoryNotFoundError: If the category does not exist.
        """
        await self._ensure_assignment_exists(draft.brand, draft.category)

        product = ProductModel(
            name=draft.name,
            description=draft.description,
            price=draft.price,
            images=image_entries(image_paths or []),
            colors=unique_colors(draft.colors),
            discount=draft.discount,
            stock=draft.stock,
            brand_id=draft.brand,
            category_id=draft.category,
        )
        await self.products.save(product)
        await self.session.commit()

        logger.info(
            "Product created",
            product_id=product.id,
            brand_id=product.brand_id,
            category_id=product.category_id,
        )

        await self._dispatch(
            self.references.product_created,
            product.id,
            Assignment(product.brand_id, product.category_id),
        )
        return product

    async def update_product(
        self,
        changes: ProductChanges,
        image_paths: list[str] | None = None,
    ) -> UpdateResult:
        """Partially update a product and move it between brand/category lists.

        Args:
            changes: Provided fields.
            image_paths: Stored paths of new images; when given they
                replace the existing images.

        Returns:
            Update acknowledgment.

        Raises:
            ProductNotFoundError: If the product does not exist.
            BrandNotFoundError: If a new brand does not exist.
            CategoryNotFoundError: If a new category does not exist.
        """
        product = await self.products.get_by_id(changes.product_id)
        if product is None:
            raise ProductNotFoundError(changes.product_id)

        previous = Assignment(product.brand_id, product.category_id)
        proposed = Assignment(changes.brand, changes.category)
        await self._ensure_assignment_exists(proposed.brand_id, proposed.category_id)

        values = changes.provided()
        if image_paths:
            values["images"] = image_entries(image_paths)

        modified = False
        for key, value in values.items():
            if getattr(product, key) != value:
                setattr(product, key, value)
                modified = True

        await self.session.commit()

        logger.info(
            "Product updated",
            product_id=product.id,
            fields=sorted(values),
            modified=modified,
        )

        await self._dispatch(
            self.references.product_reassigned,
            product.id,
            previous,
            proposed,
        )
        return UpdateResult(matched_count=1, modified_count=int(modified))

    async def delete_product(
        self,
        product_id: str,
        brand_id: str,
        category_id: str,
    ) -> DeleteResult:
        """Delete a product and remove it from the given brand and category.

        The brand/category ids come from the caller and are not checked
        against the stored product.

        Returns:
            Delete acknowledgment for the product record only.
        """
        deleted = await self.products.delete_by_id(product_id)
        await self.session.commit()

        logger.info("Product deleted", product_id=product_id, deleted_count=deleted)

        await self._dispatch(
            self.references.product_deleted,
            product_id,
            Assignment(brand_id, category_id),
        )
        return DeleteResult(deleted_count=deleted)

    async def _ensure_assignment_exists(
        self,
        brand_id: str | None,
        category_id: str | None,
    ) -> None:
        """Check that the given brand and category exist; None is skipped."""
        if brand_id is not None and not await self.brands.exists(brand_id):
            raise BrandNotFoundError(brand_id)
        if category_id is not None and not await self.categories.exists(category_id):
            raise CategoryNotFoundError(category_id)

    # ------------------------------------------------------------------
    # Brands and categories
    # ------------------------------------------------------------------

    async def list_brands(self) -> list[BrandModel]:
        """List all brands."""
        return list(await self.brands.list_all())

    async def get_brand(self, brand_id: str) -> BrandModel:
        """Get brand by ID.

        Raises:
            BrandNotFoundError: If no brand has this ID.
        """
        brand = await self.brands.get_by_id(brand_id)
        if brand is None:
            raise BrandNotFoundError(brand_id)
        return brand

    async def create_brand(self, name: str) -> BrandModel:
        """Create a brand with no products."""
        brand = await self.brands.save(BrandModel(name=name, products=[]))
        await self.session.commit()
        logger.info("Brand created", brand_id=brand.id, name=name)
        return brand

    async def list_categories(self) -> list[CategoryModel]:
        """List all categories."""
        return list(await self.categories.list_all())

    async def get_category(self, category_id: str) -> CategoryModel:
        """Get category by ID.

        Raises:
            CategoryNotFoundError: If no category has this ID.
        """
        category = await self.categories.get_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    async def create_category(self, name: str) -> CategoryModel:
        """Create a category with no products."""
        category = await self.categories.save(CategoryModel(name=name, products_id=[]))
        await self.session.commit()
        logger.info("Category created", category_id=category.id, name=name)
        return category
