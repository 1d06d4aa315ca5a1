"""Tests for hydrating pydantic models from stored documents."""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

import pytest
from bson import Decimal128, ObjectId
from pydantic import BaseModel, ConfigDict

from mongo_filtering import PersistenceError, model_from_doc

OID = ObjectId("5a1b2c3d4e5f60718293a4b5")
REF = UUID("12345678-1234-5678-1234-567812345678")


class Product(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: ObjectId
    name: str
    price: Decimal
    ref: UUID | None = None
    history: list[Decimal] = []
    specs: dict[str, Decimal] = {}


def test_model_from_doc() -> None:
    doc = {
        "_id": OID,
        "name": "pen",
        "price": Decimal128("9.99"),
        "ref": str(REF),
        "history": [Decimal128("1.5")],
        "specs": {"weight": Decimal128("0.02")},
    }
    product = model_from_doc(Product, doc)
    assert product.id == OID
    assert product.price == Decimal("9.99")
    assert product.ref == REF
    assert product.history == [Decimal("1.5")]
    assert product.specs == {"weight": Decimal("0.02")}
    assert "_id" in doc


def test_custom_id_field() -> None:
    class Tag(BaseModel):
        model_config = ConfigDict(arbitrary_types_allowed=True)

        key: ObjectId
        label: str

    tag = model_from_doc(Tag, {"_id": OID, "label": "x"}, id_field="key")
    assert tag.key == OID


def test_partial_document() -> None:
    product = model_from_doc(Product, {"_id": OID, "name": "pen"}, partial=True)
    assert product.id == OID
    assert product.name == "pen"
    assert product.model_fields_set == {"id", "name"}
    assert product.history == []


@pytest.mark.parametrize(
    "doc",
    [
        "not a document",
        {"_id": OID, "name": "pen"},
        {"_id": OID, "name": "pen", "price": "cheap"},
    ],
)
def test_invalid_documents(doc) -> None:
    with pytest.raises(PersistenceError):
        model_from_doc(Product, doc)
