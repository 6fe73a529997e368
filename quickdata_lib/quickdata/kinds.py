"""The closed set of value kinds a store table can hold."""
from __future__ import annotations
from enum import Enum
from typing import Any

INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1


class ValueKind(str, Enum):
    STRING = "string"
    INT = "int"
    LONG = "long"
    BOOL = "bool"
    FLOAT = "float"
    DOUBLE = "double"

    @property
    def field(self) -> str:
        """Name of the table in the serialized snapshot."""
        return _FIELDS[self]


_FIELDS = {
    ValueKind.STRING: "allString",
    ValueKind.INT: "allInt",
    ValueKind.LONG: "allLong",
    ValueKind.BOOL: "allBool",
    ValueKind.FLOAT: "allFloat",
    ValueKind.DOUBLE: "allDouble",
}


def validate_value(kind: ValueKind, value: Any) -> Any:
    """Check `value` fits `kind` and return it in its stored form.

    Raises TypeError for the wrong Python type and ValueError for integers
    outside the kind's range. bool is not accepted where an int is expected.
    """
    if kind is ValueKind.STRING:
        if not isinstance(value, str):
            raise TypeError(f"{kind.value} value must be str, got {type(value).__name__}")
        return value
    if kind is ValueKind.BOOL:
        if not isinstance(value, bool):
            raise TypeError(f"{kind.value} value must be bool, got {type(value).__name__}")
        return value
    if kind in (ValueKind.INT, ValueKind.LONG):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{kind.value} value must be int, got {type(value).__name__}")
        lo, hi = (INT32_MIN, INT32_MAX) if kind is ValueKind.INT else (INT64_MIN, INT64_MAX)
        if not lo <= value <= hi:
            raise ValueError(f"{kind.value} value {value} out of range [{lo}, {hi}]")
        return value
    # FLOAT / DOUBLE accept ints and store them as float
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{kind.value} value must be float, got {type(value).__name__}")
    return float(value)
