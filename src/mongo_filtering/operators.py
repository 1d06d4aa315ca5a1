"""Filter operators and their MongoDB fragment rendering.

Each operator collapses every value accumulated for one field into a single
fragment.  Range operators keep only the tightest bound
(``x > max(a, b)`` is ``x > a and x > b``); equality operators widen to set
membership when more than one value is present.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from bson.regex import Regex

from .comparison import max_value, min_value

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = logging.getLogger(__name__)


class Operator(str, Enum):
    """Supported filter operators."""

    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    LIKE = "like"

    @property
    def suffix(self) -> str:
        """Query-key suffix selecting this operator (``""`` for EQ)."""
        if self is Operator.EQ:
            return ""
        return f"_{self.value}"

    @classmethod
    def from_suffix(cls, key: str) -> tuple[str, Operator]:
        """Split ``key`` into ``(field, operator)``.

        ``age_gte`` -> ``("age", Operator.GTE)``; keys without a known suffix
        are equality filters.
        """
        for op in _SUFFIXED:
            suffix = op.suffix
            if key.endswith(suffix):
                return key[: -len(suffix)], op
        return key, cls.EQ


_SUFFIXED = tuple(op for op in Operator if op is not Operator.EQ)


def _render_eq(values: Sequence[Any]) -> dict[str, Any]:
    if len(values) == 1:
        return {"$eq": values[0]}
    return {"$in": list(values)}


def _render_ne(values: Sequence[Any]) -> dict[str, Any]:
    if len(values) == 1:
        return {"$ne": values[0]}
    return {"$nin": list(values)}


def _render_lower_bound(mongo_op: str) -> Callable[[Sequence[Any]], dict | None]:
    def render(values: Sequence[Any]) -> dict[str, Any] | None:
        bound = max_value(values)
        if bound is None:
            logger.debug(
                "Dropping %s fragment over incomparable values %r", mongo_op, values
            )
            return None
        return {mongo_op: bound}

    return render


def _render_upper_bound(mongo_op: str) -> Callable[[Sequence[Any]], dict | None]:
    def render(values: Sequence[Any]) -> dict[str, Any] | None:
        bound = min_value(values)
        if bound is None:
            logger.debug(
                "Dropping %s fragment over incomparable values %r", mongo_op, values
            )
            return None
        return {mongo_op: bound}

    return render


def _render_like(values: Sequence[Any]) -> dict[str, Any]:
    # Only the first pattern is used; further values are ignored.
    return {"$regex": Regex(str(values[0]))}


_RENDERERS: dict[Operator, Callable[[Sequence[Any]], dict[str, Any] | None]] = {
    Operator.EQ: _render_eq,
    Operator.NE: _render_ne,
    Operator.GT: _render_lower_bound("$gt"),
    Operator.GTE: _render_lower_bound("$gte"),
    Operator.LT: _render_upper_bound("$lt"),
    Operator.LTE: _render_upper_bound("$lte"),
    Operator.LIKE: _render_like,
}


def render(op: Operator | str, values: Sequence[Any]) -> dict[str, Any] | None:
    """Render ``values`` under ``op`` into one filter fragment.

    Returns ``None`` when there is nothing to render: no values, an unknown
    operator, or a range operator over an incomparable batch.
    """
    if not values:
        return None
    try:
        operator = Operator(op)
    except ValueError:
        logger.debug("Unknown operator %r renders no fragment", op)
        return None
    return _RENDERERS[operator](values)
