"""Domain layer - catalog errors.

Example usage:
    from comfy.domain import ProductNotFoundError

    raise ProductNotFoundError(product_id)
"""

from comfy.domain.exceptions import (
    BrandNotFoundError,
    CategoryNotFoundError,
    DomainError,
    InvalidSearchPatternError,
    NotFoundError,
    ProductNotFoundError,
)

__all__ = [
    "BrandNotFoundError",
    "CategoryNotFoundError",
    "DomainError",
    "InvalidSearchPatternError",
    "NotFoundError",
    "ProductNotFoundError",
]
