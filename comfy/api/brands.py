"""Brand API endpoints.

Provides endpoints for listing, reading and creating brands.
"""

from fastapi import APIRouter, status

from comfy.api.converters import brand_to_response
from comfy.api.dependencies import CatalogServiceDep
from comfy.api.schemas import BrandCreateRequest, BrandSchema, ErrorResponse

router = APIRouter(prefix="/brands", tags=["Brands"])


@router.get(
    "",
    response_model=list[BrandSchema],
    status_code=status.HTTP_200_OK,
    summary="List brands",
)
async def list_brands(service: CatalogServiceDep) -> list[BrandSchema]:
    """List all brands with their product ids."""
    brands = await service.list_brands()
    return [brand_to_response(b) for b in brands]


@router.get(
    "/{brand_id}",
    response_model=BrandSchema,
    status_code=status.HTTP_200_OK,
    summary="Get brand",
    responses={404: {"model": ErrorResponse}},
)
async def get_brand(brand_id: str, service: CatalogServiceDep) -> BrandSchema:
    """Get a brand by ID."""
    return brand_to_response(await service.get_brand(brand_id))


@router.post(
    "",
    response_model=BrandSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create brand",
)
async def create_brand(
    request: BrandCreateRequest,
    service: CatalogServiceDep,
) -> BrandSchema:
    """Create a brand with an empty product list."""
    return brand_to_response(await service.create_brand(request.name))
