# anthropometric/db/users.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from anthropometric.db import USERS, get_db
from anthropometric.errors import Conflict

# Projection that keeps the password hash out of list/detail reads.
_NO_PASSWORD = {"password": 0}


def to_object_id(value) -> Optional[ObjectId]:
    """ObjectId for ``value`` or None when it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserStore:
    """Credential store over the ``users`` collection."""

    def __init__(self, collection: Collection):
        self.col = collection

    def create(self, doc: dict) -> dict:
        """Insert a new user; the unique email index turns a duplicate into Conflict."""
        now = _utcnow()
        doc = {**doc, "email": doc["email"].strip().lower(), "createdAt": now, "updatedAt": now}
        try:
            res = self.col.insert_one(doc)
        except DuplicateKeyError:
            raise Conflict()
        doc["_id"] = res.inserted_id
        return doc

    def find_by_email(self, email: str) -> Optional[dict]:
        return self.col.find_one({"email": (email or "").strip().lower()})

    def find_by_id(self, user_id) -> Optional[dict]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return self.col.find_one({"_id": oid}, _NO_PASSWORD)

    def find(self, query: dict) -> list[dict]:
        return list(self.col.find(query, _NO_PASSWORD).sort("name", 1))

    def update_fields(self, user_id, fields: dict) -> Optional[dict]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return self.col.find_one_and_update(
            {"_id": oid},
            {"$set": {**fields, "updatedAt": _utcnow()}},
            projection=_NO_PASSWORD,
            return_document=ReturnDocument.AFTER,
        )

    def delete(self, user_id) -> bool:
        oid = to_object_id(user_id)
        if oid is None:
            return False
        return self.col.delete_one({"_id": oid}).deleted_count == 1


def get_user_store() -> UserStore:
    return UserStore(get_db()[USERS])
