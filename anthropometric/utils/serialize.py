# anthropometric/utils/serialize.py
from __future__ import annotations

from typing import Any

from bson import ObjectId

# Never leaves the store layer.
_PRIVATE_KEYS = {"password"}


def _convert(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return to_public(value)
    if isinstance(value, list):
        return [_convert(v) for v in value]
    return value


def to_public(doc: dict | None) -> dict | None:
    """Mongo document -> JSON-ready dict (``_id`` becomes ``id``)."""
    if doc is None:
        return None
    out: dict[str, Any] = {}
    for key, value in doc.items():
        if key in _PRIVATE_KEYS:
            continue
        out["id" if key == "_id" else key] = _convert(value)
    return out
