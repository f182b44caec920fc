"""Domain exceptions.

All domain-level errors raised by the catalog. Each error declares the
HTTP status it is rendered with; anything else raised while handling a
request is rendered as a 500.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the API layer.
    """

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Lookup Errors
# ============================================================================


class NotFoundError(DomainError):
    """Base class for missing-record errors."""

    status_code = 404


class ProductNotFoundError(NotFoundError):
    """Raised when a product id has no record."""

    def __init__(self, product_id: str) -> None:
        """Initialize product not found error.

        Args:
            product_id: ID of the missing product.
        """
        super().__init__(
            f"product {product_id} isn't found",
            details={"product_id": product_id},
        )


class BrandNotFoundError(NotFoundError):
    """Raised when a brand id has no record."""

    def __init__(self, brand_id: str) -> None:
        super().__init__(
            f"brand {brand_id} isn't found",
            details={"brand_id": brand_id},
        )


class CategoryNotFoundError(NotFoundError):
    """Raised when a category id has no record."""

    def __init__(self, category_id: str) -> None:
        super().__init__(
            f"category {category_id} isn't found",
            details={"category_id": category_id},
        )


# ============================================================================
# Query Errors
# ============================================================================


class InvalidSearchPatternError(DomainError):
    """Raised when a search query is not a valid pattern."""

    status_code = 400

    def __init__(self, pattern: str, reason: str) -> None:
        """Initialize invalid search pattern error.

        Args:
            pattern: The rejected search query.
            reason: Why the pattern could not be compiled.
        """
        super().__init__(
            f"invalid search pattern {pattern!r}: {reason}",
            details={"pattern": pattern, "reason": reason},
        )
