"""Product API endpoints.

Provides endpoints for the product catalog:
- GET /products - filtered, price-sorted, paginated listing
- GET /products/search - search by product, brand or category name
- GET /products/{id} - product with brand and category resolved
- POST /products - create a product (multipart, with images)
- PUT /products - partially update a product (multipart, optional images)
- DELETE /products - delete a product
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from comfy.api.converters import product_to_detail, product_to_response
from comfy.api.dependencies import CatalogServiceDep
from comfy.api.schemas import (
    DeleteAcknowledgement,
    ErrorResponse,
    ProductDeleteRequest,
    ProductDetailSchema,
    ProductListResponse,
    ProductSchema,
    ProductSearchResponse,
    UpdateAcknowledgement,
)
from comfy.catalog.service import ProductChanges, ProductDraft, ProductFilter, parse_sort
from comfy.infrastructure.uploads import UploadStorage, get_upload_storage

router = APIRouter(prefix="/products", tags=["Products"])

UploadStorageDep = Annotated[UploadStorage, Depends(get_upload_storage)]


# ============================================================================
# Queries
# ============================================================================


@router.get(
    "",
    response_model=ProductListResponse,
    status_code=status.HTTP_200_OK,
    summary="List products",
)
async def list_products(
    service: CatalogServiceDep,
    price: Annotated[float | None, Query(ge=0, description="Maximum price; 0 means any")] = None,
    brand: Annotated[str | None, Query(description="Brand ID or 'all'")] = None,
    category: Annotated[str | None, Query(description="Category ID or 'all'")] = None,
    sort: Annotated[
        str | None,
        Query(description="1 price ascending, -1 descending; other values are ignored"),
    ] = None,
    page: Annotated[int, Query(ge=1)] = 1,
) -> ProductListResponse:
    """List products matching the filters.

    Min/max price are computed over all matching products, not just
    the returned page.
    """
    listing = await service.list_products(
        ProductFilter(price=price, brand=brand, category=category),
        sort=parse_sort(sort),
        page=page,
    )
    return ProductListResponse(
        data=[product_to_response(p) for p in listing.page.items],
        total_pages=listing.page.total_pages,
        min_price=listing.min_price,
        max_price=listing.max_price,
    )


@router.get(
    "/search",
    response_model=ProductSearchResponse,
    status_code=status.HTTP_200_OK,
    summary="Search products",
    responses={400: {"model": ErrorResponse}},
)
async def search_products(
    service: CatalogServiceDep,
    search: Annotated[str | None, Query(description="Case-insensitive pattern")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
) -> ProductSearchResponse:
    """Search products by product name, brand name or category name."""
    results = await service.search_products(search, page)
    return ProductSearchResponse(
        data=[product_to_detail(p) for p in results.items],
        total_pages=results.total_pages,
    )


@router.get(
    "/{product_id}",
    response_model=ProductDetailSchema,
    status_code=status.HTTP_200_OK,
    summary="Get product",
    responses={404: {"model": ErrorResponse}},
)
async def get_product(product_id: str, service: CatalogServiceDep) -> ProductDetailSchema:
    """Get a product with its brand and category records."""
    product = await service.get_product(product_id)
    return product_to_detail(product)


# ============================================================================
# Mutations
# ============================================================================


@router.post(
    "",
    response_model=ProductSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
    responses={404: {"model": ErrorResponse}},
)
async def add_product(
    service: CatalogServiceDep,
    storage: UploadStorageDep,
    name: Annotated[str, Form(min_length=1)],
    price: Annotated[float, Form(ge=0)],
    brand: Annotated[str, Form(min_length=1)],
    category: Annotated[str, Form(min_length=1)],
    description: Annotated[str, Form()] = "",
    discount: Annotated[float, Form()] = 0,
    stock: Annotated[int, Form(ge=0)] = 0,
    colors: Annotated[list[str] | None, Form()] = None,
    images: Annotated[list[UploadFile] | None, File()] = None,
) -> ProductSchema:
    """Create a product.

    Uploaded images are stored in upload order; duplicate colors are
    dropped. The product is added to its brand's and category's product
    lists after the response is sent. Stored images are deleted again
    when the product is rejected.
    """
    image_paths = await storage.save_all(images or [])
    try:
        product = await service.add_product(
            ProductDraft(
                name=name,
                price=price,
                brand=brand,
                category=category,
                description=description,
                discount=discount,
                stock=stock,
                colors=colors or [],
            ),
            image_paths=image_paths,
        )
    except Exception:
        await storage.discard(image_paths)
        raise
    return product_to_response(product)


@router.put(
    "",
    response_model=UpdateAcknowledgement,
    status_code=status.HTTP_200_OK,
    summary="Update product",
    responses={404: {"model": ErrorResponse}},
)
async def update_product(
    service: CatalogServiceDep,
    storage: UploadStorageDep,
    product_id: Annotated[str, Form(alias="_id", min_length=1)],
    name: Annotated[str | None, Form(min_length=1)] = None,
    description: Annotated[str | None, Form()] = None,
    price: Annotated[float | None, Form(ge=0)] = None,
    discount: Annotated[float | None, Form()] = None,
    stock: Annotated[int | None, Form(ge=0)] = None,
    brand: Annotated[str | None, Form(min_length=1)] = None,
    category: Annotated[str | None, Form(min_length=1)] = None,
    colors: Annotated[list[str] | None, Form()] = None,
    images: Annotated[list[UploadFile] | None, File()] = None,
) -> UpdateAcknowledgement:
    """Partially update a product.

    New images replace the existing ones; without images they are kept.
    A changed brand or category moves the product between product lists
    after the response is sent. Stored images are deleted again when the
    update is rejected.
    """
    image_paths = await storage.save_all(images) if images else None
    try:
        result = await service.update_product(
            ProductChanges(
                product_id=product_id,
                name=name,
                description=description,
                price=price,
                discount=discount,
                stock=stock,
                brand=brand,
                category=category,
                colors=colors,
            ),
            image_paths=image_paths,
        )
    except Exception:
        await storage.discard(image_paths or [])
        raise
    return UpdateAcknowledgement(
        acknowledged=result.acknowledged,
        matched_count=result.matched_count,
        modified_count=result.modified_count,
    )


@router.delete(
    "",
    response_model=DeleteAcknowledgement,
    status_code=status.HTTP_200_OK,
    summary="Delete product",
)
async def delete_product(
    request: ProductDeleteRequest,
    service: CatalogServiceDep,
) -> DeleteAcknowledgement:
    """Delete a product.

    The product is removed from the given brand's and category's product
    lists after the response is sent.
    """
    result = await service.delete_product(request.id, request.brand, request.category)
    return DeleteAcknowledgement(
        acknowledged=result.acknowledged,
        deleted_count=result.deleted_count,
    )
