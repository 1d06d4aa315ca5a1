"""OffsetPaginator: page arithmetic over skip/limit/count."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

PLACEHOLDER = "..."


@dataclass(frozen=True)
class PageItem:
    """One entry of a pager: a page number or a gap placeholder."""

    page_num: int | None = None
    is_placeholder: bool = False

    @classmethod
    def gap(cls) -> PageItem:
        return cls(page_num=None, is_placeholder=True)

    def __str__(self) -> str:
        if self.is_placeholder:
            return PLACEHOLDER
        return str(self.page_num)


class OffsetPaginator:
    """Pagination metadata for a skip/limit query that matched ``count`` rows.

    Inputs are normalised: ``limit`` is taken as its absolute value and
    negative ``skip`` / ``count`` clamp to ``0``.  A ``limit`` of ``0``
    means a single unbounded page.
    """

    __slots__ = ("_count", "_limit", "_page", "_skip", "_total_pages")

    def __init__(self, skip: int, limit: int, count: int) -> None:
        skip = max(skip, 0)
        limit = abs(limit)
        count = max(count, 0)
        self._skip = skip
        self._limit = limit
        self._count = count
        self._page = skip // limit + 1 if limit > 0 else 1
        if count == 0 or limit == 0:
            self._total_pages = 1
        else:
            self._total_pages = math.ceil(count / limit)

    @property
    def skip(self) -> int:
        return self._skip

    @property
    def page(self) -> int:
        return self._page

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def total_items(self) -> int:
        return self._count

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def has_prev(self) -> bool:
        return self._page > 1

    @property
    def prev_page(self) -> int:
        return self._page - 1 if self.has_prev else self._page

    @property
    def has_next(self) -> bool:
        return self._page < self._total_pages

    @property
    def next_page(self) -> int:
        return self._page + 1 if self.has_next else self._page

    def page_range(
        self,
        left_edge: int,
        left_current: int,
        right_current: int,
        right_edge: int,
    ) -> list[PageItem]:
        """Page numbers for a pager, with gaps.

        Keeps the first ``left_edge`` pages, ``left_current`` pages before and
        ``right_current`` pages after the current one, and the last
        ``right_edge`` pages. A placeholder separates kept pages that are not
        adjacent::

            >>> [str(i) for i in OffsetPaginator(80, 10, 166).page_range(2, 2, 2, 2)]
            ['1', '2', '...', '7', '8', '9', '10', '11', '...', '16', '17']
        """
        total = self._total_pages
        pages: set[int] = set()
        pages.update(range(1, min(left_edge, total) + 1))
        pages.update(
            range(
                max(1, self._page - left_current),
                min(self._page + right_current, total) + 1,
            )
        )
        pages.update(range(max(total - right_edge + 1, 1), total + 1))

        items: list[PageItem] = []
        previous: int | None = None
        for num in sorted(pages):
            if previous is not None and num != previous + 1:
                items.append(PageItem.gap())
            items.append(PageItem(page_num=num))
            previous = num
        return items

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-compatible dictionary."""
        return {
            "page": self._page,
            "limit": self._limit,
            "total_items": self._count,
            "total_pages": self._total_pages,
            "has_prev": self.has_prev,
            "prev_page": self.prev_page,
            "has_next": self.has_next,
            "next_page": self.next_page,
        }

    def __repr__(self) -> str:
        return (
            f"OffsetPaginator(page={self._page}, limit={self._limit}, "
            f"total_items={self._count}, total_pages={self._total_pages})"
        )
