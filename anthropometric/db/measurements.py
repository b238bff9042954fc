# anthropometric/db/measurements.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from anthropometric.db import USERS, get_db
from anthropometric.db.users import to_object_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MeasurementStore:
    """
    Store for one measurement kind (anthropometric, performance or health).

    Every read returns the document with ``athleteId`` expanded to
    ``{"_id", "name"}`` of the referenced user, or left as the raw id when
    that user no longer exists.
    """

    def __init__(self, collection: Collection, users: Collection):
        self.col = collection
        self.users = users

    # --- reference population ------------------------------------------------
    def _populate(self, docs: list[dict]) -> list[dict]:
        ids = {d["athleteId"] for d in docs if d.get("athleteId") is not None}
        if not ids:
            return docs
        names = {u["_id"]: u for u in self.users.find({"_id": {"$in": list(ids)}}, {"name": 1})}
        for d in docs:
            ref = names.get(d.get("athleteId"))
            if ref is not None:
                d["athleteId"] = {"_id": ref["_id"], "name": ref.get("name")}
        return docs

    def populate(self, doc: Optional[dict]) -> Optional[dict]:
        if doc is None:
            return None
        return self._populate([doc])[0]

    # --- CRUD ------------------------------------------------------------------
    def create(self, doc: dict) -> dict:
        now = _utcnow()
        doc = {**doc, "createdAt": now, "updatedAt": now}
        doc.setdefault("date", now)
        res = self.col.insert_one(doc)
        return self.populate(self.col.find_one({"_id": res.inserted_id}))

    def find_by_owner(self, owner_id) -> list[dict]:
        cursor = self.col.find({"ownerId": to_object_id(owner_id)}).sort("date", DESCENDING)
        return self._populate(list(cursor))

    def find_by_id(self, measurement_id) -> Optional[dict]:
        oid = to_object_id(measurement_id)
        if oid is None:
            return None
        return self.col.find_one({"_id": oid})

    def update_by_id(self, measurement_id, fields: dict) -> Optional[dict]:
        doc = self.col.find_one_and_update(
            {"_id": to_object_id(measurement_id)},
            {"$set": {**fields, "updatedAt": _utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return self.populate(doc)

    def delete_by_id(self, measurement_id) -> bool:
        return self.col.delete_one({"_id": to_object_id(measurement_id)}).deleted_count == 1


def measurement_store(collection_name: str) -> Callable[[], MeasurementStore]:
    """FastAPI dependency factory bound to one measurement collection."""

    def _dep() -> MeasurementStore:
        db = get_db()
        return MeasurementStore(db[collection_name], db[USERS])

    return _dep
