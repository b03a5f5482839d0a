"""Unit tests for PageRequest and Page."""

from __future__ import annotations

import pytest

from streamflow.application.pagination import MAX_PAGE_SIZE, Page, PageRequest
from streamflow.kernel.errors import ValidationError


class TestPageRequest:
    def test_defaults(self) -> None:
        req = PageRequest()
        assert req.page == 0
        assert req.size == 10
        assert req.offset == 0

    def test_offset_is_zero_based(self) -> None:
        assert PageRequest(page=2, size=10).offset == 20

    def test_negative_page_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            PageRequest(page=-1)
        assert exc_info.value.errors[0]["field"] == "page"

    @pytest.mark.parametrize("size", [0, -5, MAX_PAGE_SIZE + 1])
    def test_size_out_of_range_rejected(self, size: int) -> None:
        with pytest.raises(ValidationError):
            PageRequest(size=size)


class TestPage:
    def test_of_slices(self) -> None:
        page = Page.of(list(range(10)), PageRequest(page=1, size=4))
        assert page.items == [4, 5, 6, 7]
        assert page.total == 10
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_previous is True

    def test_last_page(self) -> None:
        page = Page.of(list(range(10)), PageRequest(page=2, size=4))
        assert page.items == [8, 9]
        assert page.has_next is False

    def test_past_the_end_is_empty(self) -> None:
        page = Page.of([1, 2], PageRequest(page=5, size=2))
        assert page.items == []
        assert page.total == 2

    def test_empty(self) -> None:
        page = Page.of([], PageRequest())
        assert page.total_pages == 0
        assert page.has_next is False
        assert page.has_previous is False

    def test_map(self) -> None:
        page = Page.of([1, 2, 3], PageRequest(size=2)).map(lambda x: x * 10)
        assert page.items == [10, 20]
        assert page.total == 3

    def test_to_dict(self) -> None:
        body = Page.of(["a", "b", "c"], PageRequest(size=2)).to_dict(str.upper)
        assert body == {"items": ["A", "B"], "total": 3, "page": 0, "size": 2, "totalPages": 2, "hasNext": True}
