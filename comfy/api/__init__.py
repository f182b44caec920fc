"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from comfy.api.brands import router as brands_router
from comfy.api.categories import router as categories_router
from comfy.api.health import router as health_router
from comfy.api.products import router as products_router

__all__ = [
    "brands_router",
    "categories_router",
    "health_router",
    "products_router",
]
