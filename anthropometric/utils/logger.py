# anthropometric/utils/logger.py
import logging
from datetime import datetime, timezone

from pymongo.errors import PyMongoError

from anthropometric.db import ACTIVITY_LOGS, get_db

logger = logging.getLogger(__name__)


def log_activity(user_id: str, action: str, metadata: dict | None = None):
    # Runs after the store write; a failed log entry must not turn that into a 500.
    try:
        get_db()[ACTIVITY_LOGS].insert_one({
            "user_id": user_id,
            "action": action,
            "timestamp": datetime.now(timezone.utc),
            "metadata": metadata or {},
        })
    except PyMongoError:
        logger.warning("activity %s for %s not logged", action, user_id, exc_info=True)
