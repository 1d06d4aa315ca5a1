"""QueryParams: multi-value query parameters with typed getters."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

T = TypeVar("T")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INFINITIES = frozenset({"inf", "infinity"})
_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_int(raw: str) -> int | None:
    """Parse a base-10 integer literal; ``None`` if ``raw`` is not one.

    Only values that fit a signed 64-bit BSON integer are accepted.
    """
    if not _INT_RE.fullmatch(raw):
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def parse_float(raw: str) -> float | None:
    """Parse a float literal; ``None`` if ``raw`` is not one.

    Surrounding whitespace and digit separators are rejected, and so are
    literals too large for a float (only an explicit ``inf`` is infinite).
    """
    if not raw or raw != raw.strip() or "_" in raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if math.isinf(value) and raw.lstrip("+-").lower() not in _INFINITIES:
        return None
    return value


def parse_bool(raw: str) -> bool | None:
    """Parse ``1/t/true/...`` or ``0/f/false/...``; ``None`` otherwise."""
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    return None


class QueryParams:
    """Read-only view over query parameters that may repeat.

    Accepts a mapping of key to a string or a sequence of strings, or an
    iterable of ``(key, value)`` pairs (as produced by ``parse_qsl`` or
    ``multi_items()``). Key order and value order are preserved.
    """

    def __init__(
        self,
        params: Mapping[str, str | Iterable[str]]
        | Iterable[tuple[str, str]]
        | QueryParams
        | None = None,
    ) -> None:
        self._data: dict[str, list[str]] = {}
        if params is None:
            return
        if isinstance(params, QueryParams):
            self._data = {k: list(v) for k, v in params._data.items()}
            return
        if isinstance(params, Mapping):
            for key, value in params.items():
                if isinstance(value, str):
                    self._data.setdefault(key, []).append(value)
                else:
                    self._data.setdefault(key, []).extend(str(v) for v in value)
            return
        for key, value in params:
            self._data.setdefault(key, []).append(value)

    # -- mapping-like access -------------------------------------------------

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield every ``(key, value)`` pair, repeated keys included."""
        for key, values in self._data.items():
            for value in values:
                yield key, value

    def getlist(self, key: str) -> list[str]:
        return list(self._data.get(key, []))

    # -- typed getters ---------------------------------------------------------

    def get_str(self, key: str, default: str = "") -> str:
        """First value of ``key`` if present and non-empty, else ``default``."""
        values = self._data.get(key)
        if values and values[0] != "":
            return values[0]
        return default

    def get_strs(
        self, key: str, default: list[str] | None = None
    ) -> list[str] | None:
        if key in self._data:
            return list(self._data[key])
        return default

    def get_int(self, key: str, default: int) -> int:
        return self._first(key, parse_int, default)

    def get_ints(
        self, key: str, default: list[int] | None = None
    ) -> list[int] | None:
        return self._all(key, parse_int, default)

    def get_float(self, key: str, default: float) -> float:
        return self._first(key, parse_float, default)

    def get_floats(
        self, key: str, default: list[float] | None = None
    ) -> list[float] | None:
        return self._all(key, parse_float, default)

    def get_bool(self, key: str, default: bool) -> bool:
        return self._first(key, parse_bool, default)

    def get_bools(
        self, key: str, default: list[bool] | None = None
    ) -> list[bool] | None:
        return self._all(key, parse_bool, default)

    def _first(self, key: str, parse: Callable[[str], T | None], default: T) -> T:
        values = self._data.get(key)
        if not values:
            return default
        parsed = parse(values[0])
        return default if parsed is None else parsed

    def _all(
        self,
        key: str,
        parse: Callable[[str], T | None],
        default: list[T] | None,
    ) -> list[T] | None:
        candidates = (parse(v) for v in self._data.get(key, []))
        parsed = [p for p in candidates if p is not None]
        return parsed or default

    def __repr__(self) -> str:
        return f"QueryParams({self._data!r})"


def as_query_params(params: Any) -> QueryParams:
    """Wrap ``params`` in :class:`QueryParams` unless it already is one."""
    if isinstance(params, QueryParams):
        return params
    return QueryParams(params)
