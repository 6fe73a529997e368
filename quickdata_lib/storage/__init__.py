"""Storage abstraction package for QuickData."""
from __future__ import annotations
from pathlib import Path

from .base import StorageBackend
from .file_backend import FileStorageBackend
from .memory_backend import MemoryStorage
from .serializer import Serializer, JSONSerializer, EncryptedSerializer, DEFAULT_KEY


def create_storage(backend: str = "file", data_dir: str | Path = "./data") -> StorageBackend:
    """Return a storage backend by name ('file' or 'memory')."""
    if backend == "file":
        return FileStorageBackend(data_dir=data_dir)
    if backend == "memory":
        return MemoryStorage()
    raise ValueError(f"Unknown storage backend: {backend!r}")


__all__ = [
    "StorageBackend",
    "FileStorageBackend",
    "MemoryStorage",
    "Serializer",
    "JSONSerializer",
    "EncryptedSerializer",
    "DEFAULT_KEY",
    "create_storage",
]
