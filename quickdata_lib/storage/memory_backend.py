"""Simple memory-backed storage backend

This backend stores text in memory as a data structure `[<namespace>][<key>]`.
It also counts writes, which makes it handy for checking save coalescing.
"""
from threading import RLock
from typing import Dict

from .base import StorageBackend


class MemoryStorage(StorageBackend):
    def __init__(self):
        self._lock = RLock()
        self._store: Dict[str, Dict[str, str]] = {}
        self.write_count = 0

    def save(self, namespace: str, key: str, value: str) -> None:
        with self._lock:
            self._store.setdefault(namespace, {})[key] = value
            self.write_count += 1

    def load(self, namespace: str, key: str) -> str:
        with self._lock:
            ns = self._store.get(namespace, {})
            if key not in ns:
                raise KeyError(key)
            return ns[key]

    def ensure(self, namespace: str, key: str) -> None:
        with self._lock:
            self._store.setdefault(namespace, {}).setdefault(key, "")

    def location(self, namespace: str, key: str) -> str:
        return f"memory://{namespace}/{key}"
