"""Storage backend interface definitions.

Defines the StorageBackend abstract class used by the store to persist
and retrieve its encrypted snapshot text. Backends deal in text only;
serializers sit above them and handle the format.
"""
from __future__ import annotations
from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Abstract storage backend.

    Implementations must be thread-safe if used concurrently.
    """

    @abstractmethod
    def save(self, namespace: str, key: str, value: str) -> None:
        """Save `value` under `namespace` and `key`, replacing prior content.

        Implementations should create directories as needed and ensure
        atomic writes when possible.
        """

    @abstractmethod
    def load(self, namespace: str, key: str) -> str:
        """Load and return the text stored under `namespace`/`key`.

        Should raise `KeyError` if the key does not exist.
        """

    @abstractmethod
    def ensure(self, namespace: str, key: str) -> None:
        """Create the namespace and an empty entry for `key` if missing."""

    def location(self, namespace: str, key: str) -> str:
        """Human readable location of `namespace`/`key`, used for logging."""
        return f"{namespace}/{key}"
