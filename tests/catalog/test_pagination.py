"""Tests for fixed-size pagination."""

import pytest

from comfy.catalog.pagination import PAGE_SIZE, Page, paginate


class TestPaginate:
    """Tests for paginate()."""

    def test_page_size_is_twelve(self) -> None:
        """Pages hold twelve records."""
        assert PAGE_SIZE == 12

    def test_first_page(self) -> None:
        """First page holds the first twelve records."""
        page = paginate(list(range(30)))
        assert page.items == list(range(12))
        assert page.page == 1
        assert page.total == 30

    def test_last_partial_page(self) -> None:
        """Last page holds the remainder."""
        page = paginate(list(range(30)), page=3)
        assert page.items == [24, 25, 26, 27, 28, 29]

    def test_page_past_end_is_empty(self) -> None:
        """Pages past the end are empty but keep the total."""
        page = paginate(list(range(5)), page=4)
        assert page.items == []
        assert page.total_pages == 1

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, 0), (1, 1), (12, 1), (13, 2), (24, 2), (25, 3)],
    )
    def test_total_pages_rounds_up(self, count: int, expected: int) -> None:
        """Total pages is the ceiling of count / 12."""
        assert paginate(list(range(count))).total_pages == expected


class TestPage:
    """Tests for Page."""

    def test_custom_page_size(self) -> None:
        """Total pages follows the page size."""
        page = Page(items=[], total=10, page=1, page_size=4)
        assert page.total_pages == 3
