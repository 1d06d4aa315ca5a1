"""MongoCollection: read adapter over a pymongo collection.

Wraps a synchronous :class:`pymongo.collection.Collection` with filter
execution, offset pagination, marker pagination, error translation and
slow-query logging.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from bson import ObjectId
from pymongo.errors import DuplicateKeyError as PyMongoDuplicateKeyError
from pymongo.errors import PyMongoError

from .config import DEFAULT_CONFIG, QueryConfig
from .exceptions import (
    DuplicateKeyError,
    InvalidIdError,
    MongoQueryError,
    NotFoundError,
)
from .marker import Direction, Marker
from .paginator import OffsetPaginator
from .parser import is_object_id_hex
from .ports import attribute_accessor, item_accessor
from .serialization import model_from_doc

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from pydantic import BaseModel
    from pymongo.collection import Collection

    from .marker import MarkerPage

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def build_sort(
    order_by: Sequence[str] | Sequence[tuple[str, str]] | str | None,
) -> list[tuple[str, int]]:
    """Build pymongo sort pairs.

    Accepts ``"-field"``, ``["-field", "other"]`` or
    ``[(field, "asc"|"desc")]``.
    """
    if not order_by:
        return []
    if isinstance(order_by, str):
        order_by = [order_by]
    result: list[tuple[str, int]] = []
    for item in order_by:
        if isinstance(item, tuple):
            field, direction = item[0], item[1]
            result.append((field, -1 if str(direction).lower() == "desc" else 1))
        elif isinstance(item, str) and item:
            if item.startswith("-"):
                result.append((item[1:], -1))
            else:
                result.append((item, 1))
    return result


class MongoCollection(Generic[T]):
    """Query one MongoDB collection, optionally hydrating pydantic models.

    With ``model_cls`` set, documents are returned as model instances whose
    ``id_field`` attribute carries the document ``_id``.
    """

    def __init__(
        self,
        collection: Collection[Any],
        *,
        config: QueryConfig | None = None,
        model_cls: type[BaseModel] | None = None,
        id_field: str = "id",
    ) -> None:
        self._collection = collection
        self._config = config or DEFAULT_CONFIG
        self._model_cls = model_cls
        self._id_field = id_field

    @property
    def name(self) -> str:
        return str(self._collection.name)

    # -- plumbing ------------------------------------------------------------

    def _invoke(self, operation: str, fn: Callable[[], R]) -> R:
        """Run ``fn`` translating driver errors and timing the call."""
        started = time.perf_counter()
        try:
            return fn()
        except PyMongoDuplicateKeyError as e:
            raise DuplicateKeyError(str(e)) from e
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        finally:
            self._log_slow_query(operation, time.perf_counter() - started)

    def _log_slow_query(self, operation: str, elapsed: float) -> None:
        threshold = self._config.slow_query_threshold
        if threshold > 0 and elapsed > threshold:
            logger.warning(
                "Slow query on %s.%s took %.3fs, exceeds expected %.3fs",
                self.name,
                operation,
                elapsed,
                threshold,
            )

    def _hydrate(self, doc: dict[str, Any], *, partial: bool = False) -> Any:
        if self._model_cls is None:
            return doc
        return model_from_doc(
            self._model_cls, doc, id_field=self._id_field, partial=partial
        )

    # -- single documents ----------------------------------------------------

    def find_one(
        self,
        query: dict[str, Any] | None = None,
        sort: Sequence[str] | str | None = None,
    ) -> Any:
        """Return the first matching document; raise NotFoundError if none."""
        sort_spec = build_sort(sort) or None
        doc = self._invoke(
            "find_one",
            lambda: self._collection.find_one(query or {}, sort=sort_spec),
        )
        if doc is None:
            raise NotFoundError(f"No document in {self.name} matches {query!r}")
        return self._hydrate(doc)

    def find_by_id(self, document_id: str | ObjectId) -> Any:
        """Find one document by ObjectId or its 24-char hex form."""
        if isinstance(document_id, str):
            if not is_object_id_hex(document_id):
                raise InvalidIdError(document_id)
            document_id = ObjectId(document_id)
        elif not isinstance(document_id, ObjectId):
            raise InvalidIdError(document_id)
        return self.find_one({"_id": document_id})

    # -- lists ---------------------------------------------------------------

    def find_all(
        self,
        query: dict[str, Any] | None = None,
        projection: dict[str, Any] | None = None,
        *,
        skip: int = 0,
        limit: int = 0,
        sort: Sequence[str] | str | None = None,
    ) -> list[Any]:
        """Return matching documents, skipped, limited and sorted.

        ``limit`` is only applied when greater than ``0``.  With a
        ``projection`` and a model class, models are built from the projected
        fields only.
        """
        sort_spec = build_sort(sort)

        def run() -> list[dict[str, Any]]:
            cursor = self._collection.find(query or {}, projection)
            if sort_spec:
                cursor = cursor.sort(sort_spec)
            if skip > 0:
                cursor = cursor.skip(skip)
            if limit > 0:
                cursor = cursor.limit(limit)
            return list(cursor)

        partial = projection is not None
        docs = self._invoke("find", run)
        return [self._hydrate(doc, partial=partial) for doc in docs]

    def count(self, query: dict[str, Any] | None = None) -> int:
        return self._invoke(
            "count", lambda: self._collection.count_documents(query or {})
        )

    def execute(
        self, query: dict[str, Any] | None, sort_field: str, limit: int
    ) -> list[Any]:
        """Storage executor used by :class:`~mongo_filtering.marker.Marker`."""
        return self.find_all(query, limit=limit, sort=sort_field or None)

    # -- pagination ----------------------------------------------------------

    def find_all_with_pagination(
        self,
        query: dict[str, Any] | None = None,
        projection: dict[str, Any] | None = None,
        *,
        skip: int = 0,
        limit: int = 0,
        sort: Sequence[str] | str | None = None,
    ) -> tuple[list[Any], OffsetPaginator]:
        """Like :meth:`find_all` plus offset pagination metadata."""
        items = self.find_all(query, projection, skip=skip, limit=limit, sort=sort)
        total = self.count(query)
        return items, OffsetPaginator(skip, limit, total)

    def marker(
        self,
        field: str = "_id",
        boundary: Any = None,
        direction: Direction | str = Direction.FIRST,
    ) -> Marker:
        """Build a marker whose accessor matches this collection's records."""
        if self._model_cls is None:
            accessor = item_accessor
        else:
            accessor = attribute_accessor({"_id": self._id_field})
        return Marker(field, boundary, direction, accessor=accessor)

    def find_all_with_marker(
        self,
        query: dict[str, Any] | None,
        marker: Marker,
        projection: dict[str, Any] | None = None,
        *,
        limit: int = 0,
    ) -> MarkerPage:
        """Range-based page of documents; see :class:`Marker`."""

        def executor(
            page_query: dict[str, Any] | None, sort_field: str, page_limit: int
        ) -> list[Any]:
            return self.find_all(
                page_query, projection, limit=page_limit, sort=sort_field or None
            )

        return marker.fetch(executor, query, limit)
