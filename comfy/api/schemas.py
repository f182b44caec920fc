"""API schemas for the Comfy catalog API.

Pydantic models for request/response validation and serialization.
Record ids are exposed as ``_id``.
"""

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format.
    """

    msg: str = Field(..., description="Human-readable error message")


class RecordSchema(BaseModel):
    """Base for records exposing their id as ``_id``."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Record ID")


# ============================================================================
# Brand & Category Schemas
# ============================================================================


class BrandSchema(RecordSchema):
    """Brand with the ids of its products."""

    name: str
    products: list[str] = Field(default_factory=list)


class CategorySchema(RecordSchema):
    """Category with the ids of its products."""

    name: str
    products_id: list[str] = Field(default_factory=list)


class BrandCreateRequest(BaseModel):
    """Request to create a brand."""

    name: str = Field(..., min_length=1, max_length=200)


class CategoryCreateRequest(BaseModel):
    """Request to create a category."""

    name: str = Field(..., min_length=1, max_length=200)


# ============================================================================
# Product Schemas
# ============================================================================


class ImageSchema(BaseModel):
    """Stored product image."""

    src: str = Field(..., description="Stored path of the uploaded file")


class ProductBaseSchema(RecordSchema):
    """Product fields shared by all product representations."""

    name: str
    description: str = ""
    price: float
    images: list[ImageSchema] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    discount: float = 0
    stock: int = 0


class ProductSchema(ProductBaseSchema):
    """Product with brand and category as ids."""

    brand: str
    category: str


class ProductDetailSchema(ProductBaseSchema):
    """Product with brand and category resolved to full records."""

    brand: BrandSchema | None = None
    category: CategorySchema | None = None


class ProductListResponse(BaseModel):
    """Page of listed products with price range of the whole match."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[ProductSchema]
    total_pages: int = Field(..., alias="totalPages")
    min_price: float = Field(..., alias="minPrice")
    max_price: float = Field(..., alias="maxPrice")


class ProductSearchResponse(BaseModel):
    """Page of search results."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[ProductDetailSchema]
    total_pages: int = Field(..., alias="totalPages")


class ProductDeleteRequest(BaseModel):
    """Request to delete a product and drop it from its brand/category."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", min_length=1)
    brand: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)


class UpdateAcknowledgement(BaseModel):
    """Acknowledgment of a product update."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool
    matched_count: int = Field(..., alias="matchedCount")
    modified_count: int = Field(..., alias="modifiedCount")


class DeleteAcknowledgement(BaseModel):
    """Acknowledgment of a product delete."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool
    deleted_count: int = Field(..., alias="deletedCount")
