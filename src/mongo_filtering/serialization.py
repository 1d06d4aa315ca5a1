"""Hydrate pydantic models from the documents a collection returns."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from bson import Decimal128
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import PersistenceError

TModel = TypeVar("TModel", bound=BaseModel)


def _plain(value: Any) -> Any:
    # pydantic has no validator for Decimal128
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def model_from_doc(
    cls: type[TModel],
    doc: Mapping[str, Any],
    *,
    id_field: str = "id",
    partial: bool = False,
) -> TModel:
    """Build a ``cls`` instance from one stored document.

    The document ``_id`` is exposed as ``id_field``.  A document read through
    a projection usually lacks fields the model requires; with ``partial`` it
    is built without validation from the fields present, the others taking
    the model defaults and staying out of ``model_fields_set``.
    """
    if not isinstance(doc, Mapping):
        raise PersistenceError(
            f"cannot build {cls.__name__} from {type(doc).__name__}"
        )
    fields = {(id_field if k == "_id" else k): _plain(v) for k, v in doc.items()}
    if partial:
        return cls.model_construct(**fields)
    try:
        return cls.model_validate(fields)
    except PydanticValidationError as e:
        raise PersistenceError(
            f"document {doc.get('_id')!r} is not a valid {cls.__name__}: {e}"
        ) from e
