"""
Marker: range-based ("keyset") pagination.

A marker names the field pages are cut on, the boundary value seen on the
current page and the page wanted next.  Instead of skipping rows, the query
is narrowed to rows beyond the boundary::

    marker = Marker("_id", last_seen_id, Direction.NEXT)
    page = marker.fetch(collection.execute, {"status": "active"}, limit=20)
    page.items, page.prev, page.next

The field should be unique and indexed; ``_id`` is the usual choice.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, NamedTuple

from .exceptions import InvalidMarkerError
from .ports import item_accessor

if TYPE_CHECKING:
    from .ports import FieldAccessor, StorageExecutor


class Direction(str, Enum):
    """Page requested relative to the marker."""

    FIRST = "first"
    LAST = "last"
    NEXT = "next"
    PREV = "previous"

    @property
    def is_reverse(self) -> bool:
        """Pages fetched backwards are queried in descending order."""
        return self in (Direction.LAST, Direction.PREV)


class MarkerPage(NamedTuple):
    """One page of rows plus the boundaries for the neighbouring pages."""

    items: list[Any]
    prev: Any
    next: Any


class Marker:
    """Cursor over ``field`` for one page request."""

    def __init__(
        self,
        field: str,
        boundary: Any = None,
        direction: Direction | str = Direction.FIRST,
        *,
        accessor: FieldAccessor | None = None,
    ) -> None:
        self.field = field
        self.boundary = boundary
        self.direction = direction
        self._accessor = accessor or item_accessor

    def validate(self) -> None:
        """Raise :class:`InvalidMarkerError` if the marker cannot be used."""
        if not self.field:
            raise InvalidMarkerError({"field": ["marker's field can't be empty"]})
        direction = self._direction()
        if direction in (Direction.NEXT, Direction.PREV) and self.boundary is None:
            raise InvalidMarkerError(
                {
                    "boundary": [
                        "marker's boundary can't be empty when page is "
                        f"{direction.value}"
                    ]
                }
            )

    def _direction(self) -> Direction:
        try:
            return Direction(self.direction)
        except ValueError:
            raise InvalidMarkerError(
                {"direction": [f"invalid page type: {self.direction!r}"]}
            ) from None

    def query_statement(self, base: dict[str, Any] | None) -> dict[str, Any] | None:
        """Narrow ``base`` to the rows after (NEXT) or before (PREV) the boundary.

        FIRST and LAST return ``base`` untouched.
        """
        direction = self._direction()
        if direction is Direction.NEXT:
            range_query = {self.field: {"$gt": self.boundary}}
        elif direction is Direction.PREV:
            range_query = {self.field: {"$lt": self.boundary}}
        else:
            return base
        if not base:
            return range_query
        return {"$and": [base, range_query]}

    @property
    def sort_field(self) -> str:
        if self._direction().is_reverse:
            return f"-{self.field}"
        return self.field

    def execute(
        self, executor: StorageExecutor, base: dict[str, Any] | None, limit: int
    ) -> list[Any]:
        """Fetch one page through ``executor``, always in ascending order."""
        self.validate()
        rows = list(executor(self.query_statement(base), self.sort_field, limit))
        if self._direction().is_reverse:
            rows.reverse()
        return rows

    def prev_next(self, rows: list[Any]) -> tuple[Any, Any]:
        """Return the boundary values of the first and last row of a page."""
        if not rows:
            return None, None
        return (
            self._accessor(rows[0], self.field),
            self._accessor(rows[-1], self.field),
        )

    def fetch(
        self, executor: StorageExecutor, base: dict[str, Any] | None, limit: int
    ) -> MarkerPage:
        """:meth:`execute` and :meth:`prev_next` in one call."""
        rows = self.execute(executor, base, limit)
        prev, next_ = self.prev_next(rows)
        return MarkerPage(items=rows, prev=prev, next=next_)

    def __repr__(self) -> str:
        return (
            f"Marker(field={self.field!r}, boundary={self.boundary!r}, "
            f"direction={self.direction!r})"
        )
