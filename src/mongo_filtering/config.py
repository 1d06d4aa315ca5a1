"""
Query configuration.

``QueryConfig`` gathers every tunable of the parsing and pagination layer
(reserved parameter names, defaults, timestamp format, slow-query threshold).
It is immutable and passed explicitly to the objects that need it; there is
no module-level mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class QueryConfig:
    """
    Immutable container for query-parsing and pagination settings.

    Attributes:
        page_key: Query key carrying the 1-based page number.
        limit_key: Query key carrying the page size.
        sort_key: Query key carrying the sort field(s).
        order_key: Query key carrying ``asc``/``desc``.
        default_page: Page used when none (or an invalid one) is given.
        default_limit: Page size used when none (or an invalid one) is given.
        datetime_format: ``strptime`` format for timestamp parameters.
        slow_query_threshold: Seconds after which a query is logged as slow.
            ``0`` disables slow-query logging.
    """

    page_key: str = "_page"
    limit_key: str = "_limit"
    sort_key: str = "_sort"
    order_key: str = "_order"
    default_page: int = 1
    default_limit: int = 20
    datetime_format: str = "%Y-%m-%dT%H:%M:%S"
    slow_query_threshold: float = 2.0

    @property
    def reserved_keys(self) -> frozenset[str]:
        """Keys consumed by pagination/sorting and never used as filters."""
        return frozenset(
            (self.page_key, self.limit_key, self.sort_key, self.order_key)
        )

    def with_keys(
        self,
        *,
        page: str | None = None,
        limit: str | None = None,
        sort: str | None = None,
        order: str | None = None,
    ) -> QueryConfig:
        """Return a copy with the given reserved key names replaced."""
        return replace(
            self,
            page_key=page if page is not None else self.page_key,
            limit_key=limit if limit is not None else self.limit_key,
            sort_key=sort if sort is not None else self.sort_key,
            order_key=order if order is not None else self.order_key,
        )

    def with_defaults(
        self, *, page: int | None = None, limit: int | None = None
    ) -> QueryConfig:
        """Return a copy with updated default page / page size."""
        return replace(
            self,
            default_page=page if page is not None else self.default_page,
            default_limit=limit if limit is not None else self.default_limit,
        )


DEFAULT_CONFIG = QueryConfig()
