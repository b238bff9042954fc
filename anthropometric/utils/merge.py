# anthropometric/utils/merge.py
from __future__ import annotations

from typing import Any, Iterable, Mapping


def is_blank(value: Any) -> bool:
    """Absent, None and empty/whitespace strings count as "no change"."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def merge_profile(existing: Mapping[str, Any], patch: Mapping[str, Any], fields: Iterable[str]) -> dict:
    """
    Fallback-to-existing merge for profile updates.

    Returns the value to write for each field in ``fields``: the patch value
    when one was supplied, otherwise the stored one. Fields missing from both
    are left out, so no explicit nulls get written. Falsy-but-real values such
    as ``age=0`` are applied.
    """
    merged: dict[str, Any] = {}
    for field in fields:
        value = patch.get(field)
        if not is_blank(value):
            merged[field] = value
        elif existing.get(field) is not None:
            merged[field] = existing[field]
    return merged
