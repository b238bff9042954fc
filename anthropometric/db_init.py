import logging

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from anthropometric.db import (
    ACTIVITY_LOGS,
    ANTHROPOMETRIC,
    AUDIT_EVENTS,
    HEALTH,
    PERFORMANCE,
    USERS,
    get_db,
)

logger = logging.getLogger(__name__)


def ensure_indexes(db: Database | None = None):
    db = db if db is not None else get_db()

    # users: email uniqueness is what makes create-if-absent race safe
    db[USERS].create_index("email", unique=True)
    db[USERS].create_index([("role", ASCENDING), ("name", ASCENDING)])

    # measurements
    for name in (ANTHROPOMETRIC, PERFORMANCE, HEALTH):
        db[name].create_index([("ownerId", ASCENDING), ("date", DESCENDING)])
        db[name].create_index([("athleteId", ASCENDING), ("date", DESCENDING)])

    # activity / audit
    db[ACTIVITY_LOGS].create_index([("user_id", ASCENDING), ("timestamp", DESCENDING)])
    db[AUDIT_EVENTS].create_index([("ts", ASCENDING)])
    db[AUDIT_EVENTS].create_index([("action", ASCENDING)])

    logger.info("indexes ensured on %s", db.name)
