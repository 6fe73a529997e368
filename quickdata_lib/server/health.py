"""Server health utilities.

Provides a simple `get_health` function returning server status,
start time, uptime in seconds and the package version.
"""
from datetime import datetime, timezone
import time

from quickdata_lib import __version__

# record process start time at import
_START_TIME = time.time()

def get_health(store=None) -> dict:
    """Return a dict representing server health.

    Fields:
    - status: 'ok' or 'error'
    - start_time: ISO 8601 UTC timestamp when the process started
    - uptime_seconds: integer seconds since start
    - version: package version
    - store_path: location of the QuickData file when a store is given
    - save_queued: whether a coalesced save is waiting to run
    """
    now = time.time()
    uptime = int(now - _START_TIME)
    start_dt = datetime.fromtimestamp(_START_TIME, tz=timezone.utc)
    health = {
        "status": "ok",
        "start_time": start_dt.isoformat(),
        "uptime_seconds": uptime,
        "version": __version__,
    }
    if store is not None:
        health["store_path"] = store.path
        health["save_queued"] = store.save_queued
        if store.load_error:
            health["status"] = "error"
            health["load_error"] = store.load_error
    return health
