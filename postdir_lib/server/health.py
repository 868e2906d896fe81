"""Server health utilities.

Provides a simple `get_health` function returning server status,
start time, uptime in seconds and store reachability.
"""
from datetime import datetime, timezone
from typing import Optional
import logging
import time
import os

from postdir_lib.storage.base import StorageError

logger = logging.getLogger(__name__)

# record process start time at import
_START_TIME = time.time()


def get_health(store: Optional[object] = None) -> dict:
    """Return a dict representing server health.

    Fields:
    - status: 'ok' or 'error' (error when the store does not answer a ping)
    - start_time: ISO 8601 UTC timestamp when the process started
    - uptime_seconds: integer seconds since start
    - version: contents of the VERSION file, or 'unknown'
    - store: 'ok', 'unreachable' or None when no store was given
    """
    now = time.time()
    uptime = int(now - _START_TIME)
    start_dt = datetime.fromtimestamp(_START_TIME, tz=timezone.utc)

    version = "unknown"
    version_file = os.path.join(os.path.dirname(__file__), "../../VERSION")
    if os.path.exists(version_file):
        with open(version_file, "r") as f:
            version = f.read().strip()

    store_status = None
    if store is not None:
        try:
            store.ping()
            store_status = "ok"
        except StorageError as e:
            logger.warning("Health check could not reach the store: %s", e)
            store_status = "unreachable"

    return {
        "status": "error" if store_status == "unreachable" else "ok",
        "start_time": start_dt.isoformat(),
        "uptime_seconds": uptime,
        "version": version,
        "store": store_status,
    }
