"""FilterBuilder: accumulate (field, operator, values) and render a filter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from . import operators
from .operators import Operator

if TYPE_CHECKING:
    from collections.abc import Iterator


class FilterBuilder:
    """Single-owner accumulator for one request's filter conditions.

    Values are grouped by field, then by operator::

        builder = FilterBuilder()
        builder.add("age", Operator.GT, 18).add("age", Operator.LTE, 60)
        builder.add("name", Operator.EQ, "jack", "mary")
        builder.render()
        # {"age": {"$gt": 18, "$lte": 60}, "name": {"$in": ["jack", "mary"]}}

    Not safe for concurrent mutation; build one per request.
    """

    def __init__(self) -> None:
        self._conditions: dict[str, dict[Operator, list[Any]]] = {}

    def add(self, field: str, op: Operator, *values: Any) -> FilterBuilder:
        """Append ``values`` under ``(field, op)``. Never validates."""
        bucket = self._conditions.setdefault(field, {}).setdefault(op, [])
        bucket.extend(values)
        return self

    def values(self, field: str, op: Operator) -> list[Any]:
        """Return a copy of the values accumulated under ``(field, op)``."""
        return list(self._conditions.get(field, {}).get(op, []))

    @property
    def fields(self) -> list[str]:
        return list(self._conditions)

    def render(self) -> dict[str, dict[str, Any]]:
        """Render the accumulated conditions into a MongoDB filter document.

        Fragments of one field are shallow-merged in insertion order, so a
        key produced by two operators keeps the last one written.  Fields
        whose fragments were all dropped do not appear in the result.
        """
        document: dict[str, dict[str, Any]] = {}
        for field, buckets in self._conditions.items():
            merged: dict[str, Any] = {}
            for op, values in buckets.items():
                fragment = operators.render(op, values)
                if fragment:
                    merged.update(fragment)
            if merged:
                document[field] = merged
        return document

    def __len__(self) -> int:
        return len(self._conditions)

    def __contains__(self, field: object) -> bool:
        return field in self._conditions

    def __iter__(self) -> Iterator[str]:
        return iter(self._conditions)
