"""Shared fixtures for mongo-filtering tests."""

from __future__ import annotations

from typing import Any

import pytest
from bson import ObjectId

from mongo_filtering import QueryParser


def oid(n: int) -> ObjectId:
    return ObjectId(f"{n:024x}")


class RecordingExecutor:
    """In-memory storage executor over a list of dict rows.

    Records every call so tests can assert what reached storage.
    """

    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self.rows = rows
        self.calls: list[tuple[Any, str, int]] = []

    def __call__(
        self, query: dict[str, Any] | None, sort_field: str, limit: int
    ) -> list[dict[str, Any]]:
        self.calls.append((query, sort_field, limit))
        field = sort_field.lstrip("-")
        rows = [r for r in self.rows if self._matches(r, query)]
        rows.sort(key=lambda r: r[field], reverse=sort_field.startswith("-"))
        return rows[:limit] if limit > 0 else rows

    def _matches(self, row: dict[str, Any], query: dict[str, Any] | None) -> bool:
        if not query:
            return True
        if "$and" in query:
            return all(self._matches(row, q) for q in query["$and"])
        for field, cond in query.items():
            value = row.get(field)
            if isinstance(cond, dict):
                if "$gt" in cond and not value > cond["$gt"]:
                    return False
                if "$lt" in cond and not value < cond["$lt"]:
                    return False
                if "$eq" in cond and value != cond["$eq"]:
                    return False
            elif value != cond:
                return False
        return True


@pytest.fixture
def parser() -> QueryParser:
    return QueryParser()


@pytest.fixture
def rows() -> list[dict[str, Any]]:
    return [
        {"_id": oid(i), "seq": i, "kind": "even" if i % 2 == 0 else "odd"}
        for i in range(1, 11)
    ]


@pytest.fixture
def executor(rows: list[dict[str, Any]]) -> RecordingExecutor:
    return RecordingExecutor(rows)


@pytest.fixture
def mongo_db():
    """In-memory MongoDB database backed by mongomock."""
    mongomock = pytest.importorskip("mongomock")
    client = mongomock.MongoClient()
    yield client["test_db"]
    client.close()


@pytest.fixture
def people(mongo_db):
    """``people`` collection seeded with ten documents."""
    collection = mongo_db["people"]
    collection.insert_many(
        [
            {
                "_id": oid(i),
                "seq": i,
                "name": f"person-{i:02d}",
                "age": 20 + i,
                "active": i % 2 == 0,
            }
            for i in range(1, 11)
        ]
    )
    return collection
