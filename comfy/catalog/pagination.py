"""Fixed-size pagination over fully materialized result lists."""

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")

PAGE_SIZE = 12


@dataclass
class Page(Generic[T]):
    """One page of a result list.

    Attributes:
        items: Records on this page (at most PAGE_SIZE).
        total: Size of the whole result list.
        page: Requested page number (1-indexed).
        page_size: Records per page.
    """

    items: list[T]
    total: int
    page: int
    page_size: int = PAGE_SIZE

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return math.ceil(self.total / self.page_size)


def paginate(records: Sequence[T], page: int = 1, page_size: int = PAGE_SIZE) -> Page[T]:
    """Slice one page out of a result list.

    Args:
        records: Full, already ordered result list.
        page: Page number, 1-indexed. Pages past the end are empty.
        page_size: Records per page.

    Returns:
        The requested page.
    """
    start = (page - 1) * page_size
    return Page(
        items=list(records[start:start + page_size]),
        total=len(records),
        page=page,
        page_size=page_size,
    )
