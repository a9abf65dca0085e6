"""Pydantic model <-> BSON document round-trip (camelCase keys, dates, enums)."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, TypeVar, cast

from bson import ObjectId
from pydantic import BaseModel

from ..exceptions import PersistenceError

TModel = TypeVar("TModel", bound=BaseModel)


def _serialize_value(value: Any) -> Any:
    """Convert Python types to BSON-safe types."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {_serialize_key(k): _serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    return value


def _serialize_key(key: Any) -> str:
    return key.value if isinstance(key, Enum) else str(key)


def _deserialize_value(value: Any) -> Any:
    """Convert BSON types back to Python types."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: _deserialize_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_deserialize_value(v) for v in value]
    return value


def model_to_doc(model: BaseModel, *, id_field: str = "id") -> dict[str, Any]:
    """Convert a model to a BSON-ready document with camelCase keys.

    ``id_field`` becomes ``_id``; a ``None`` id is dropped so the server (or
    the repository) assigns one.
    """
    try:
        data = model.model_dump(by_alias=True)
    except Exception as e:
        raise PersistenceError(str(e)) from e
    data = cast("dict[str, Any]", _serialize_value(data))
    if id_field in data:
        doc_id = data.pop(id_field)
        if doc_id is not None:
            data["_id"] = doc_id
    return data


def model_from_doc(
    cls: type[TModel],
    doc: dict[str, Any],
    *,
    id_field: str = "id",
) -> TModel:
    """Convert a BSON document to a model instance, mapping ``_id`` back."""
    if not isinstance(doc, dict):
        raise PersistenceError("Document must be a dict")
    doc = dict(doc)
    if "_id" in doc:
        doc[id_field] = doc.pop("_id")
    doc = _deserialize_value(doc)
    try:
        return cls.model_validate(doc)
    except Exception as e:
        raise PersistenceError(str(e)) from e
