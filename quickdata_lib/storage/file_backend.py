"""Simple file-backed storage backend for snapshot text.

This backend stores UTF-8 text under `<data_dir>/<namespace>/<key>` with
no file extension, so the store file lands at `data/QuickData/DataInfo`.
It provides atomic writes by writing to a temporary file then renaming.
"""
from __future__ import annotations
import os
from pathlib import Path
import logging

from .base import StorageBackend

logger = logging.getLogger(__name__)

TMP_SUFFIX = ".tmp"


class FileStorageBackend(StorageBackend):
    def __init__(self, data_dir: str | Path = "./data") -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _ns_dir(self, namespace: str) -> Path:
        ns = self.data_dir / namespace
        ns.mkdir(parents=True, exist_ok=True)
        return ns

    def _path_for(self, namespace: str, key: str) -> Path:
        safe_key = key.replace("/", "_")
        return self._ns_dir(namespace) / safe_key

    def save(self, namespace: str, key: str, value: str) -> None:
        path = self._path_for(namespace, key)
        tmp = path.with_name(path.name + TMP_SUFFIX)
        with open(tmp, "w", encoding="utf-8", newline="") as f:
            f.write(value)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)
        logger.debug("FileStorageBackend wrote %s (%d chars)", path, len(value))

    def load(self, namespace: str, key: str) -> str:
        path = self._path_for(namespace, key)
        if not path.exists():
            raise KeyError(key)
        # utf-8-sig tolerates a BOM left by other writers of the same file
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            return f.read()

    def ensure(self, namespace: str, key: str) -> None:
        path = self._path_for(namespace, key)
        if not path.exists():
            path.touch()
            logger.debug("FileStorageBackend created empty %s", path)

    def location(self, namespace: str, key: str) -> str:
        return str(self._path_for(namespace, key).resolve())
