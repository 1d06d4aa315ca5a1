"""Tests for OffsetPaginator."""

from __future__ import annotations

import pytest

from mongo_filtering import OffsetPaginator, PageItem


def labels(items: list[PageItem]) -> list[str]:
    return [str(item) for item in items]


class TestMetadata:
    def test_middle_page(self) -> None:
        p = OffsetPaginator(80, 10, 166)
        assert p.page == 9
        assert p.total_pages == 17
        assert p.total_items == 166
        assert (p.has_prev, p.prev_page) == (True, 8)
        assert (p.has_next, p.next_page) == (True, 10)

    def test_empty_result(self) -> None:
        p = OffsetPaginator(0, 10, 0)
        assert p.page == 1
        assert p.total_pages == 1
        assert not p.has_prev
        assert not p.has_next
        assert p.prev_page == p.next_page == 1

    def test_last_page(self) -> None:
        p = OffsetPaginator(160, 10, 166)
        assert p.page == 17
        assert not p.has_next
        assert p.next_page == 17

    def test_exact_multiple(self) -> None:
        assert OffsetPaginator(0, 10, 30).total_pages == 3

    def test_negative_inputs_are_normalised(self) -> None:
        p = OffsetPaginator(-5, -10, -3)
        assert (p.skip, p.limit, p.total_items) == (0, 10, 0)
        assert p.page == 1
        assert p.total_pages == 1

    def test_negative_limit_uses_absolute_value(self) -> None:
        p = OffsetPaginator(20, -10, 45)
        assert p.page == 3
        assert p.total_pages == 5

    def test_zero_limit_is_one_page(self) -> None:
        p = OffsetPaginator(20, 0, 50)
        assert p.page == 1
        assert p.total_pages == 1
        assert not p.has_next

    def test_to_dict(self) -> None:
        assert OffsetPaginator(80, 10, 166).to_dict() == {
            "page": 9,
            "limit": 10,
            "total_items": 166,
            "total_pages": 17,
            "has_prev": True,
            "prev_page": 8,
            "has_next": True,
            "next_page": 10,
        }

    def test_repr(self) -> None:
        assert repr(OffsetPaginator(0, 10, 5)) == (
            "OffsetPaginator(page=1, limit=10, total_items=5, total_pages=1)"
        )


class TestPageRange:
    def test_wide_window(self) -> None:
        items = OffsetPaginator(80, 10, 166).page_range(2, 5, 5, 2)
        assert labels(items) == (
            ["1", "2", "..."] + [str(n) for n in range(4, 15)] + ["...", "16", "17"]
        )

    def test_narrow_window(self) -> None:
        items = OffsetPaginator(80, 10, 166).page_range(2, 2, 2, 2)
        assert labels(items) == [
            "1", "2", "...", "7", "8", "9", "10", "11", "...", "16", "17",
        ]

    def test_overlapping_windows_have_no_gaps(self) -> None:
        items = OffsetPaginator(0, 10, 50).page_range(2, 2, 2, 2)
        assert labels(items) == ["1", "2", "3", "4", "5"]
        assert not any(item.is_placeholder for item in items)

    def test_adjacent_windows_have_no_gap(self) -> None:
        items = OffsetPaginator(40, 10, 100).page_range(2, 2, 2, 2)
        assert labels(items) == ["1", "2", "3", "4", "5", "6", "7", "...", "9", "10"]

    def test_no_leading_gap(self) -> None:
        items = OffsetPaginator(80, 10, 166).page_range(0, 1, 1, 0)
        assert labels(items) == ["8", "9", "10"]

    def test_single_page(self) -> None:
        items = OffsetPaginator(0, 10, 0).page_range(2, 2, 2, 2)
        assert items == [PageItem(page_num=1)]

    def test_pages_are_ascending_and_unique(self) -> None:
        items = OffsetPaginator(500, 10, 1000).page_range(3, 4, 4, 3)
        nums = [item.page_num for item in items if not item.is_placeholder]
        assert nums == sorted(set(nums))
        assert all(1 <= n <= 100 for n in nums)


@pytest.mark.parametrize(
    "item,expected",
    [
        (PageItem(page_num=3), "3"),
        (PageItem.gap(), "..."),
    ],
)
def test_page_item_str(item: PageItem, expected: str) -> None:
    assert str(item) == expected
