"""QueryParser: query params -> MongoDB filter, pagination and sort.

Filters follow the json-server conventions:

- ``?name=tom`` equality, repeated keys widen to ``$in``
- ``_gt``, ``_gte``, ``_lt``, ``_lte`` suffixes for ranges
- ``_ne`` to exclude a value, ``_like`` for a regular expression
- ``.`` to reach nested properties, ``id`` / ``user.id`` for ObjectIds
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, NamedTuple

from bson import ObjectId

from .builder import FilterBuilder
from .config import DEFAULT_CONFIG, QueryConfig
from .operators import Operator
from .params import as_query_params, parse_bool, parse_float, parse_int

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .params import QueryParams

    Converter = Callable[[str, str], Any]

logger = logging.getLogger(__name__)

ORDER_ASC = "asc"
ORDER_DESC = "desc"


def is_object_id_hex(raw: str) -> bool:
    """True for a 24-character hex string naming an ObjectId."""
    return len(raw) == 24 and ObjectId.is_valid(raw)


class PageRequest(NamedTuple):
    page: int
    skip: int
    limit: int


class SortSpec(NamedTuple):
    field: str
    order: str


class ParsedQuery(NamedTuple):
    """Everything a list endpoint needs from its query string."""

    filter: dict[str, Any]
    pagination: PageRequest
    sort: list[str]


class QueryParser:
    """Parse raw query parameters using an explicit :class:`QueryConfig`.

    Custom converters are ``(field, raw_value) -> value | None`` callables
    tried after the built-in coercions; the first non-``None`` result wins.
    """

    def __init__(
        self,
        config: QueryConfig | None = None,
        converters: Sequence[Converter] = (),
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._converters = tuple(converters)

    @property
    def config(self) -> QueryConfig:
        return self._config

    def parse(self, params: Any, *converters: Converter) -> ParsedQuery:
        """Return filter, pagination and sort fields in one pass."""
        query = as_query_params(params)
        return ParsedQuery(
            filter=self.build_filter(query, *converters),
            pagination=self.pagination(query),
            sort=self.sort_fields(query),
        )

    # -- filter ----------------------------------------------------------------

    def build_filter(self, params: Any, *converters: Converter) -> dict[str, Any]:
        """Translate every non-reserved parameter into a filter condition."""
        return self.builder(params, *converters).render()

    def builder(self, params: Any, *converters: Converter) -> FilterBuilder:
        """Like :meth:`build_filter` but return the unrendered builder."""
        query = as_query_params(params)
        reserved = self._config.reserved_keys
        chain = self._converters + converters
        builder = FilterBuilder()
        for key, raw in query.items():
            if key in reserved:
                continue
            self.add_param(builder, key, raw, chain)
        return builder

    def add_param(
        self,
        builder: FilterBuilder,
        key: str,
        raw: str,
        converters: Sequence[Converter] = (),
    ) -> None:
        """Add one raw ``key=raw`` pair to ``builder``."""
        field, op = Operator.from_suffix(key)
        if is_object_id_hex(raw):
            if field == "id":
                builder.add("_id", op, ObjectId(raw))
                return
            if ".id" in field:
                builder.add(field.replace(".id", "._id"), op, ObjectId(raw))
                return
        builder.add(field, op, self.coerce(field, raw, converters))

    def coerce(
        self, field: str, raw: str, converters: Sequence[Converter] = ()
    ) -> Any:
        """Convert ``raw`` to int, float, bool, datetime, custom or str.

        Numbers are tried before booleans, so ``"1"`` and ``"0"`` stay
        numeric.
        """
        as_int = parse_int(raw)
        if as_int is not None:
            return as_int
        as_float = parse_float(raw)
        if as_float is not None:
            return as_float
        as_bool = parse_bool(raw)
        if as_bool is not None:
            return as_bool
        as_timestamp = self.parse_timestamp(raw)
        if as_timestamp is not None:
            return as_timestamp
        for convert in converters:
            try:
                converted = convert(field, raw)
            except (TypeError, ValueError) as e:
                logger.debug("Converter %r rejected %s=%r: %s", convert, field, raw, e)
                continue
            if converted is not None:
                return converted
        return raw

    def parse_timestamp(self, raw: str) -> datetime | None:
        """Parse ``raw`` with the configured format; ``None`` on a miss.

        Fields must be zero-padded exactly as the format renders them, so
        ``2024-1-2T3:4:5`` is not a timestamp.
        """
        fmt = self._config.datetime_format
        try:
            value = datetime.strptime(raw, fmt)
        except ValueError:
            return None
        if value.strftime(fmt) != raw:
            return None
        return value

    # -- pagination ------------------------------------------------------------

    def pagination(self, params: Any) -> PageRequest:
        """Return ``(page, skip, limit)``; invalid values fall back to defaults."""
        query = as_query_params(params)
        cfg = self._config
        page = query.get_int(cfg.page_key, cfg.default_page)
        if page <= 0:
            page = cfg.default_page
        limit = query.get_int(cfg.limit_key, cfg.default_limit)
        if limit <= 0:
            limit = cfg.default_limit
        return PageRequest(page=page, skip=(page - 1) * limit, limit=limit)

    # -- sorting ---------------------------------------------------------------

    def sort(self, params: Any) -> SortSpec | None:
        """Parse a single sort field, json-server or Mongo style.

        ``?_sort=field&_order=DESC`` and ``?_sort=-field`` are equivalent.
        The order value is case-insensitive and defaults to ascending.
        """
        query = as_query_params(params)
        field = query.get_str(self._config.sort_key)
        if not field:
            return None
        if field.startswith("-"):
            return SortSpec(field[1:], ORDER_DESC)
        order = query.get_str(self._config.order_key).lower()
        if order not in (ORDER_ASC, ORDER_DESC):
            order = ORDER_ASC
        return SortSpec(field, order)

    def sort_fields(self, params: Any) -> list[str]:
        """Parse the sort parameter into Mongo-style ``["-a", "b"]`` fields.

        A comma-separated value is split and each part keeps its own sign;
        the order parameter only applies to a single unprefixed field.
        """
        query = as_query_params(params)
        raw = query.get_str(self._config.sort_key)
        if not raw:
            return []
        parts = [p.strip() for p in raw.split(",") if p.strip()]
        if len(parts) > 1:
            return parts
        field = parts[0] if parts else raw
        order = query.get_str(self._config.order_key).lower()
        if not field.startswith("-") and order == ORDER_DESC:
            field = f"-{field}"
        return [field]


def parse_query(
    params: Any | QueryParams,
    config: QueryConfig | None = None,
    *converters: Converter,
) -> dict[str, Any]:
    """Shortcut for ``QueryParser(config).build_filter(params, *converters)``."""
    return QueryParser(config).build_filter(params, *converters)
