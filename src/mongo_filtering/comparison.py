"""
Value classification and ordering.

Every filter value belongs to exactly one :class:`ComparisonClass`.  Values
of the same class are totally ordered; values of different classes cannot be
ordered at all, and a batch that mixes them is reported as invalid (``None``)
instead of being partially sorted.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any

from bson import ObjectId

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class ComparisonClass(str, Enum):
    """Category within which two values may be ordered."""

    NUMERIC = "numeric"
    TEXT = "text"
    TIMESTAMP = "timestamp"
    IDENTIFIER = "identifier"
    INCOMPARABLE = "incomparable"


def classify(value: Any) -> ComparisonClass:
    """Return the comparison class of ``value``."""
    # bool is an int subclass but never takes part in range comparisons
    if isinstance(value, bool):
        return ComparisonClass.INCOMPARABLE
    if isinstance(value, int | float):
        return ComparisonClass.NUMERIC
    if isinstance(value, str):
        return ComparisonClass.TEXT
    if isinstance(value, datetime):
        return ComparisonClass.TIMESTAMP
    if isinstance(value, ObjectId):
        return ComparisonClass.IDENTIFIER
    return ComparisonClass.INCOMPARABLE


def is_comparable(value: Any) -> bool:
    return classify(value) is not ComparisonClass.INCOMPARABLE


def _numeric_key(value: int | float) -> float:
    # Textual round trip: ints and floats of any width end up as one float.
    return float(str(value))


def _text_key(value: str) -> str:
    return value


def _timestamp_key(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _identifier_key(value: ObjectId) -> str:
    return str(value)


_SORT_KEYS: dict[ComparisonClass, Callable[[Any], Any]] = {
    ComparisonClass.NUMERIC: _numeric_key,
    ComparisonClass.TEXT: _text_key,
    ComparisonClass.TIMESTAMP: _timestamp_key,
    ComparisonClass.IDENTIFIER: _identifier_key,
}


def common_class(values: Iterable[Any]) -> ComparisonClass | None:
    """Return the class shared by every value, or ``None``.

    ``None`` is returned for an empty batch, for a batch containing an
    incomparable value and for a batch mixing two classes.
    """
    shared: ComparisonClass | None = None
    for value in values:
        cls = classify(value)
        if cls is ComparisonClass.INCOMPARABLE:
            return None
        if shared is None:
            shared = cls
        elif cls is not shared:
            return None
    return shared


def sort_values(values: Iterable[Any]) -> list[Any] | None:
    """Return ``values`` in ascending order, or ``None`` for an invalid batch.

    The input is not modified. An empty batch sorts to an empty list.
    """
    items = list(values)
    if not items:
        return []
    cls = common_class(items)
    if cls is None:
        return None
    return sorted(items, key=_SORT_KEYS[cls])


def max_value(values: Iterable[Any]) -> Any | None:
    """Return the greatest value, or ``None`` if the batch is empty or invalid."""
    ordered = sort_values(values)
    if not ordered:
        return None
    return ordered[-1]


def min_value(values: Iterable[Any]) -> Any | None:
    """Return the smallest value, or ``None`` if the batch is empty or invalid."""
    ordered = sort_values(values)
    if not ordered:
        return None
    return ordered[0]
