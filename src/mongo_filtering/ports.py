"""Collaborator protocols consumed by the pagination layer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class StorageExecutor(Protocol):
    """Run a filter and return the matching records in order.

    ``sort_field`` is a single field name, prefixed with ``-`` for
    descending order. ``limit`` of ``0`` means no limit.
    """

    def __call__(
        self, query: dict[str, Any] | None, sort_field: str, limit: int
    ) -> Sequence[Any]: ...


@runtime_checkable
class FieldAccessor(Protocol):
    """Extract the value of ``field`` from one record."""

    def __call__(self, record: Any, field: str) -> Any: ...


def item_accessor(record: Any, field: str) -> Any:
    """Read ``field`` from a mapping record; ``None`` when missing."""
    if isinstance(record, Mapping):
        return record.get(field)
    return None


def attribute_accessor(aliases: Mapping[str, str] | None = None) -> FieldAccessor:
    """Build an accessor reading attributes of object records.

    ``aliases`` maps a stored field name to the attribute holding it, e.g.
    ``{"_id": "id"}`` for models whose ``id`` attribute stores ``_id``.
    """
    names = dict(aliases or {})

    def accessor(record: Any, field: str) -> Any:
        return getattr(record, names.get(field, field), None)

    return accessor
