"""Category API endpoints.

Provides endpoints for listing, reading and creating categories.
"""

from fastapi import APIRouter, status

from comfy.api.converters import category_to_response
from comfy.api.dependencies import CatalogServiceDep
from comfy.api.schemas import CategoryCreateRequest, CategorySchema, ErrorResponse

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get(
    "",
    response_model=list[CategorySchema],
    status_code=status.HTTP_200_OK,
    summary="List categories",
)
async def list_categories(service: CatalogServiceDep) -> list[CategorySchema]:
    """List all categories with their product ids."""
    categories = await service.list_categories()
    return [category_to_response(c) for c in categories]


@router.get(
    "/{category_id}",
    response_model=CategorySchema,
    status_code=status.HTTP_200_OK,
    summary="Get category",
    responses={404: {"model": ErrorResponse}},
)
async def get_category(category_id: str, service: CatalogServiceDep) -> CategorySchema:
    """Get a category by ID."""
    return category_to_response(await service.get_category(category_id))


@router.post(
    "",
    response_model=CategorySchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
async def create_category(
    request: CategoryCreateRequest,
    service: CatalogServiceDep,
) -> CategorySchema:
    """Create a category with an empty product list."""
    return category_to_response(await service.create_category(request.name))
