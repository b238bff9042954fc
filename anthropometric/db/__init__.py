# anthropometric/db/__init__.py
from __future__ import annotations

import logging

from pymongo import MongoClient
from pymongo.database import Database

from anthropometric import settings

logger = logging.getLogger(__name__)

# --- Collections (one source of truth) ---
USERS = "users"
ANTHROPOMETRIC = "anthropometric_measurements"
PERFORMANCE = "performance_measurements"
HEALTH = "health_measurements"
ACTIVITY_LOGS = "activity_logs"
AUDIT_EVENTS = "audit_events"

_client: MongoClient | None = None
_db: Database | None = None


def get_client() -> MongoClient:
    global _client
    if _client is None:
        # MongoClient connects lazily, so this never blocks on the server.
        _client = MongoClient(settings.MONGODB_URI)
    return _client


def get_db() -> Database:
    global _db
    if _db is None:
        _db = get_client()[settings.MONGO_DB]
    return _db


def close_client() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
        logger.info("MongoDB client closed")
    _client = None
    _db = None
