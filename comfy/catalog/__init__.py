"""Product Catalog Service.

Provides product listing, search and mutations, brand/category
back-reference maintenance, and sample catalog generation.
"""

from comfy.catalog.generator import CatalogGenerator, GeneratorConfig
from comfy.catalog.models import BrandModel, CategoryModel, ProductModel
from comfy.catalog.pagination import PAGE_SIZE, Page, paginate
from comfy.catalog.references import Assignment, ReferenceMaintainer
from comfy.catalog.repository import BrandRepository, CategoryRepository, ProductRepository
from comfy.catalog.service import (
    CatalogService,
    DeleteResult,
    ProductChanges,
    ProductDraft,
    ProductFilter,
    ProductListing,
    UpdateResult,
)

__all__ = [
    # Models
    "BrandModel",
    "CategoryModel",
    "ProductModel",
    # Generator
    "CatalogGenerator",
    "GeneratorConfig",
    # Repository
    "BrandRepository",
    "CategoryRepository",
    "ProductRepository",
    # References
    "Assignment",
    "ReferenceMaintainer",
    # Pagination
    "PAGE_SIZE",
    "Page",
    "paginate",
    # Service
    "CatalogService",
    "DeleteResult",
    "ProductChanges",
    "ProductDraft",
    "ProductFilter",
    "ProductListing",
    "UpdateResult",
]
