# anthropometric/utils/audit.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pymongo.errors import PyMongoError

from anthropometric.db import AUDIT_EVENTS, get_db

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Actor:
    """Normalized identity for audit events."""
    user_id: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None

    @staticmethod
    def from_user(user: Optional[dict]) -> "Actor":
        if not user:
            return Actor()
        return Actor(
            user_id=str(user.get("_id")) if user.get("_id") is not None else None,
            email=user.get("email"),
            role=user.get("role"),
        )

    def to_dict(self) -> dict:
        return {"user_id": self.user_id, "email": self.email, "role": self.role}


def write_audit_event(
    *,
    action: str,
    ok: bool,
    actor: Optional[dict] = None,
    err: Optional[str] = None,
    meta: Optional[Dict[str, Any]] = None,
    request_ctx: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Write one normalized audit event. Best-effort: a store failure is logged,
    never raised, so auditing cannot turn a response into a 500.

    Event schema:
    {
      ts, action, ok, err,
      actor: {user_id, email, role},
      meta: {...},
      request: {request_id, method, path, ip, ua}
    }
    """
    doc = {
        "ts": _utcnow(),
        "action": action,
        "ok": ok,
        "err": err,
        "actor": Actor.from_user(actor).to_dict(),
        "meta": meta or {},
        "request": request_ctx or {},
    }
    try:
        get_db()[AUDIT_EVENTS].insert_one(doc)
    except PyMongoError:
        logger.warning("audit event %s not written", action, exc_info=True)
