"""SQLAlchemy models for product catalog.

Defines Product, Brand and Category tables. Brands and categories keep
an embedded list of the product ids assigned to them; products point
back at one brand and one category by id. The store does not enforce
either direction, the reference maintainer keeps them in step.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Float, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from comfy.infrastructure.database import Base

# JSONB on Postgres, plain JSON elsewhere (sqlite in tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BrandModel(Base):
    """Brand with the ids of the products it owns.

    Attributes:
        id: Unique brand identifier (UUID).
        name: Brand name.
        products: Ids of products whose brand is this brand.
        created_at: Creation timestamp.
        version: Row version; list updates fail on a stale read.
    """

    __tablename__ = "brands"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    products: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        """String representation."""
        return f"<Brand(id={self.id}, name={self.name})>"


class CategoryModel(Base):
    """Category with the ids of the products it owns.

    Attributes:
        id: Unique category identifier (UUID).
        name: Category name.
        products_id: Ids of products whose category is this category.
        created_at: Creation timestamp.
        version: Row version; list updates fail on a stale read.
    """

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    products_id: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, name={self.name})>"


class ProductModel(Base):
    """Product entity in the catalog.

    Attributes:
        id: Unique product identifier (UUID).
        name: Product name.
        description: Product description.
        price: Non-negative price.
        images: Ordered list of {"src": <stored path>} entries.
        colors: Distinct color values.
        discount: Discount value.
        stock: Available quantity.
        brand_id: Id of the owning brand.
        category_id: Id of the owning category.
        created_at: Creation timestamp, defines natural order.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    images: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONList, nullable=False, default=list
    )
    colors: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    discount: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    brand_id: Mapped[str] = mapped_column("brand", String(36), nullable=False, index=True)
    category_id: Mapped[str] = mapped_column(
        "category", String(36), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    # Resolved references; no foreign keys, load explicitly with selectinload
    brand: Mapped[BrandModel | None] = relationship(
        BrandModel,
        primaryjoin="foreign(ProductModel.brand_id) == BrandModel.id",
        viewonly=True,
    )
    category: Mapped[CategoryModel | None] = relationship(
        CategoryModel,
        primaryjoin="foreign(ProductModel.category_id) == CategoryModel.id",
        viewonly=True,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, name={self.name[:30]}...)>"

