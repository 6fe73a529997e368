"""Enum and object encodings layered over the string table."""
from __future__ import annotations
from enum import Enum
from functools import lru_cache
from typing import Any, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from .results import Lookup

E = TypeVar("E", bound=Enum)


def encode_enum(member: Enum) -> str:
    return member.name


def decode_enum(enum_type: Type[E], text: str) -> Lookup[E]:
    """Parse a member name. Unknown names come back CORRUPT."""
    try:
        return Lookup.found(enum_type[text])
    except KeyError:
        return Lookup.corrupt(f"{text!r} is not a member of {enum_type.__name__}")


@lru_cache(maxsize=128)
def _cached_adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def _adapter(type_: Any) -> TypeAdapter:
    try:
        hash(type_)
    except TypeError:
        # e.g. Annotated with dict metadata; cannot be a cache key
        return TypeAdapter(type_)
    return _cached_adapter(type_)


def encode_object(value: Any, type_: Any = None) -> str:
    """Serialize `value` to JSON text.

    Works for pydantic models, dataclasses, TypedDicts and plain JSON
    containers. `type_` defaults to the runtime type of `value`.
    """
    adapter = _adapter(type_ if type_ is not None else type(value))
    return adapter.dump_json(value).decode("utf-8")


def decode_object(type_: Any, text: str) -> Lookup[Any]:
    """Validate JSON text back into `type_`. Bad JSON or shape is CORRUPT."""
    try:
        return Lookup.found(_adapter(type_).validate_json(text))
    except ValidationError as e:
        return Lookup.corrupt(str(e))
