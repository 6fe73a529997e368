"""QuickData: typed key-value store with coalesced, encrypted persistence."""

from .kinds import ValueKind
from .results import Lookup, LookupStatus
from .scheduler import Scheduler, ManualScheduler, AsyncioScheduler, TimerScheduler, create_scheduler
from .store import TypedStore, NAMESPACE, DEFAULT_STORE_NAME

__all__ = [
    "ValueKind",
    "Lookup",
    "LookupStatus",
    "Scheduler",
    "ManualScheduler",
    "AsyncioScheduler",
    "TimerScheduler",
    "create_scheduler",
    "TypedStore",
    "NAMESPACE",
    "DEFAULT_STORE_NAME",
]
