"""Query-string filtering and pagination for MongoDB read APIs."""

from __future__ import annotations

from .builder import FilterBuilder
from .collection import MongoCollection, build_sort
from .comparison import (
    ComparisonClass,
    classify,
    is_comparable,
    max_value,
    min_value,
    sort_values,
)
from .config import DEFAULT_CONFIG, QueryConfig
from .exceptions import (
    DuplicateKeyError,
    InvalidIdError,
    InvalidMarkerError,
    MongoFilteringError,
    MongoQueryError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .marker import Direction, Marker, MarkerPage
from .operators import Operator, render
from .paginator import OffsetPaginator, PageItem
from .params import QueryParams
from .parser import PageRequest, ParsedQuery, QueryParser, SortSpec, parse_query
from .ports import FieldAccessor, StorageExecutor, attribute_accessor, item_accessor
from .serialization import model_from_doc

__all__ = [
    # Filters
    "ComparisonClass",
    "FilterBuilder",
    "Operator",
    "classify",
    "is_comparable",
    "max_value",
    "min_value",
    "render",
    "sort_values",
    # Parsing
    "DEFAULT_CONFIG",
    "PageRequest",
    "ParsedQuery",
    "QueryConfig",
    "QueryParams",
    "QueryParser",
    "SortSpec",
    "parse_query",
    # Pagination
    "Direction",
    "Marker",
    "MarkerPage",
    "OffsetPaginator",
    "PageItem",
    # Storage
    "FieldAccessor",
    "MongoCollection",
    "StorageExecutor",
    "attribute_accessor",
    "build_sort",
    "item_accessor",
    "model_from_doc",
    # Exceptions
    "DuplicateKeyError",
    "InvalidIdError",
    "InvalidMarkerError",
    "MongoFilteringError",
    "MongoQueryError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
]
