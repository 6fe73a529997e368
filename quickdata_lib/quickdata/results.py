"""Result type for store reads that need to say which path was taken."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class LookupStatus(str, Enum):
    FOUND = "found"
    ABSENT = "absent"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Outcome of reading one key.

    - FOUND: `value` holds the stored (decoded) value.
    - ABSENT: nothing stored under the key; `value` is None.
    - CORRUPT: something is stored but could not be decoded; `error`
      describes why and `value` is None.
    """

    status: LookupStatus
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def found(cls, value: T) -> "Lookup[T]":
        return cls(LookupStatus.FOUND, value)

    @classmethod
    def absent(cls) -> "Lookup[Any]":
        return cls(LookupStatus.ABSENT)

    @classmethod
    def corrupt(cls, error: str) -> "Lookup[Any]":
        return cls(LookupStatus.CORRUPT, error=error)

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.FOUND

    def value_or(self, default: T) -> T:
        return self.value if self.status is LookupStatus.FOUND else default  # type: ignore[return-value]
