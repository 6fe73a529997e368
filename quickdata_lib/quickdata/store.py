"""Typed key-value store persisted to one encrypted file.

`TypedStore` keeps six independent string-keyed tables (string, int, long,
bool, float, double) in memory and mirrors them to a single file through a
storage backend. Writes are coalesced: the first `set` after a save raises a
flag and hands one save callback to the scheduler; every later `set` before
that callback runs rides along in the same write.

Enums and structured objects are stored in the string table, as the
member name and as JSON text respectively.
"""
from __future__ import annotations
import threading
from enum import Enum
from typing import Any, List, Optional, Type, TypeVar, Union
import logging

from quickdata_lib.storage.base import StorageBackend
from quickdata_lib.storage.serializer import EncryptedSerializer

from .codecs import decode_enum, decode_object, encode_enum, encode_object
from .kinds import ValueKind, validate_value
from .results import Lookup, LookupStatus
from .scheduler import Scheduler
from .schema import Snapshot

logger = logging.getLogger(__name__)

NAMESPACE = "QuickData"
DEFAULT_STORE_NAME = "DataInfo"

E = TypeVar("E", bound=Enum)
KindLike = Union[ValueKind, str]


class TypedStore:
    def __init__(
        self,
        storage: StorageBackend,
        scheduler: Scheduler,
        *,
        name: str = DEFAULT_STORE_NAME,
        serializer: Optional[EncryptedSerializer] = None,
    ) -> None:
        self.storage = storage
        self.scheduler = scheduler
        self.name = name
        self.serializer = serializer or EncryptedSerializer()
        self._lock = threading.RLock()
        self._write_lock = threading.Lock()
        self._snapshot = Snapshot()
        self._save_queued = False
        # bumped on every set; lets a finished save notice sets it missed
        self._generation = 0
        self._saved_generation = 0
        self.save_count = 0
        self.load_error: Optional[str] = None
        self._load()
        logger.info("QuickData file path: %s", self.path)

    @property
    def path(self) -> str:
        return self.storage.location(NAMESPACE, self.name)

    @property
    def save_queued(self) -> bool:
        with self._lock:
            return self._save_queued

    # -- load / save ------------------------------------------------------

    def _load(self) -> None:
        self.storage.ensure(NAMESPACE, self.name)
        text = self.storage.load(NAMESPACE, self.name)
        if not text.strip():
            self._snapshot = Snapshot()
            return
        try:
            payload = self.serializer.load(text)
            self._snapshot = Snapshot.model_validate(payload)
        except ValueError as e:
            # bad base64, wrong key/padding, bad UTF-8, bad JSON or bad shape
            logger.error("QuickData: failed to parse %s, starting with empty tables: %s", self.path, e)
            self.load_error = str(e)
            self._snapshot = Snapshot()

    def _plain_text(self) -> str:
        return self.serializer.base_serializer.dump(self._snapshot.to_payload())

    def _write(self) -> None:
        # caller holds _write_lock, so files land in snapshot order
        with self._lock:
            text = self.serializer.encrypt(self._plain_text())
            generation = self._generation
        self.storage.save(NAMESPACE, self.name, text)
        with self._lock:
            self._saved_generation = generation
            self.save_count += 1
        logger.debug("QuickData saved %s (generation %d)", self.path, generation)

    def save(self) -> None:
        """Write the current snapshot now, replacing the file content."""
        with self._write_lock:
            self._write()

    def flush(self) -> None:
        """Save synchronously if anything changed since the last save.

        Waits for a save already writing on another thread, then writes
        only if that save did not cover every change.
        """
        with self._write_lock:
            with self._lock:
                dirty = self._generation != self._saved_generation
            if dirty:
                self._write()

    def _queue_save(self) -> None:
        with self._lock:
            if self._save_queued:
                return
            self._save_queued = True
        try:
            self.scheduler.schedule(self._run_queued_save)
        except Exception:
            # the change stays in memory and dirty; flush() or the next set persists it
            logger.exception("QuickData: could not schedule a save of %s", self.path)
            with self._lock:
                self._save_queued = False

    def _run_queued_save(self) -> None:
        try:
            self.save()
        except OSError:
            logger.exception("QuickData: queued save to %s failed", self.path)
            raise
        finally:
            with self._lock:
                self._save_queued = False
                missed = self._generation != self._saved_generation
        if missed:
            # a set landed after the snapshot was taken; persist it next tick
            self._queue_save()

    # -- generic access ---------------------------------------------------

    def lookup(self, kind: KindLike, key: str) -> Lookup[Any]:
        kind = ValueKind(kind)
        with self._lock:
            table = self._snapshot.table(kind)
            if key in table:
                return Lookup.found(table[key])
        return Lookup.absent()

    def get(self, kind: KindLike, key: str, default: Any = None) -> Any:
        return self.lookup(kind, key).value_or(default)

    def set(self, kind: KindLike, key: str, value: Any) -> None:
        kind = ValueKind(kind)
        if not isinstance(key, str):
            raise TypeError(f"key must be str, got {type(key).__name__}")
        if not key:
            raise ValueError("key must be a non-empty string")
        value = validate_value(kind, value)
        with self._lock:
            self._snapshot.table(kind)[key] = value
            self._generation += 1
        self._queue_save()

    def keys(self, kind: KindLike) -> List[str]:
        kind = ValueKind(kind)
        with self._lock:
            return sorted(self._snapshot.table(kind))

    def get_all_info(self, decrypt: bool = False) -> str:
        """Serialized snapshot of all tables.

        `decrypt=True` returns the plain JSON; the default returns the
        encrypted text, exactly what a save would write.
        """
        with self._lock:
            text = self._plain_text()
        if decrypt:
            return text
        return self.serializer.encrypt(text)

    # -- typed access -----------------------------------------------------

    def set_string(self, key: str, value: str) -> None:
        self.set(ValueKind.STRING, key, value)

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.get(ValueKind.STRING, key, default)

    def set_int(self, key: str, value: int) -> None:
        self.set(ValueKind.INT, key, value)

    def get_int(self, key: str, default: int = 0) -> int:
        return self.get(ValueKind.INT, key, default)

    def set_long(self, key: str, value: int) -> None:
        self.set(ValueKind.LONG, key, value)

    def get_long(self, key: str, default: int = 0) -> int:
        return self.get(ValueKind.LONG, key, default)

    def set_bool(self, key: str, value: bool) -> None:
        self.set(ValueKind.BOOL, key, value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self.get(ValueKind.BOOL, key, default)

    def set_float(self, key: str, value: float) -> None:
        self.set(ValueKind.FLOAT, key, value)

    def get_float(self, key: str, default: float = 0.0) -> float:
        return self.get(ValueKind.FLOAT, key, default)

    def set_double(self, key: str, value: float) -> None:
        self.set(ValueKind.DOUBLE, key, value)

    def get_double(self, key: str, default: float = 0.0) -> float:
        return self.get(ValueKind.DOUBLE, key, default)

    # -- enums ------------------------------------------------------------

    def set_enum(self, key: str, value: Enum) -> None:
        if not isinstance(value, Enum):
            raise TypeError(f"value must be an Enum member, got {type(value).__name__}")
        self.set(ValueKind.STRING, key, encode_enum(value))

    def lookup_enum(self, key: str, enum_type: Type[E]) -> Lookup[E]:
        raw = self.lookup(ValueKind.STRING, key)
        if not raw.ok:
            return raw
        return decode_enum(enum_type, raw.value)

    def get_enum(self, key: str, default: E, enum_type: Optional[Type[E]] = None) -> E:
        """Stored member, or `default` when missing or not a member name."""
        enum_type = enum_type or type(default)
        return self.lookup_enum(key, enum_type).value_or(default)

    # -- objects ----------------------------------------------------------

    def set_object(self, key: str, value: Any, type_: Any = None) -> None:
        self.set(ValueKind.STRING, key, encode_object(value, type_))

    def lookup_object(self, key: str, type_: Any) -> Lookup[Any]:
        raw = self.lookup(ValueKind.STRING, key)
        if not raw.ok:
            return raw
        result = decode_object(type_, raw.value)
        if result.status is LookupStatus.CORRUPT:
            logger.error("QuickData: failed to deserialize %r as %s: %s", key, type_, result.error)
        return result

    def get_object(self, key: str, default: Any = None, type_: Any = None) -> Any:
        """Stored object validated into `type_`, or `default`.

        `type_` defaults to the type of `default` (plain JSON values when the
        default is None). A missing key returns a JSON round-tripped copy of
        `default`, so callers never share state with it. A stored value that
        does not validate is logged and `default` itself is returned.
        """
        if type_ is None:
            type_ = type(default) if default is not None else Any
        result = self.lookup_object(key, type_)
        if result.status is LookupStatus.ABSENT:
            return self._copy_default(default, type_)
        return result.value_or(default)

    @staticmethod
    def _copy_default(default: Any, type_: Any) -> Any:
        try:
            copied = decode_object(type_, encode_object(default, type_))
        except (TypeError, ValueError):
            # default not representable as type_
            return default
        return copied.value_or(default)
