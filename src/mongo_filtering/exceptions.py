"""Exceptions for mongo-filtering."""

from __future__ import annotations


class MongoFilteringError(Exception):
    """Root exception for the entire mongo-filtering package."""


class ValidationError(MongoFilteringError):
    """Raised when caller-supplied input cannot be used.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))


class InvalidMarkerError(ValidationError):
    """Raised when a marker cannot drive a range-based page query.

    Usage: ``Marker.validate()`` raises this before any storage call is made.
    """


class PersistenceError(MongoFilteringError):
    """Base class for all persistence-related errors."""


class MongoQueryError(PersistenceError):
    """Raised when a query fails on the MongoDB side."""


class InvalidIdError(PersistenceError):
    """Raised when an id is not a valid ObjectId."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"invalid object id: {value!r}")


class NotFoundError(PersistenceError):
    """Raised when the requested document does not exist."""


class DuplicateKeyError(PersistenceError):
    """Raised when a write conflicts with a unique index."""
