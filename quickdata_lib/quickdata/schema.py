"""Pydantic model of the six-table snapshot as it is serialized to disk."""
from __future__ import annotations
from typing import Annotated, Any, Dict

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator

from .kinds import ValueKind, INT32_MIN, INT32_MAX, INT64_MIN, INT64_MAX

Int32 = Annotated[StrictInt, Field(ge=INT32_MIN, le=INT32_MAX)]
Int64 = Annotated[StrictInt, Field(ge=INT64_MIN, le=INT64_MAX)]

_ATTRS = {
    ValueKind.STRING: "all_string",
    ValueKind.INT: "all_int",
    ValueKind.LONG: "all_long",
    ValueKind.BOOL: "all_bool",
    ValueKind.FLOAT: "all_float",
    ValueKind.DOUBLE: "all_double",
}


class Snapshot(BaseModel):
    """All six tables. Serialized field names match the engine-side files."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    all_string: Dict[str, StrictStr] = Field(default_factory=dict, alias="allString")
    all_int: Dict[str, Int32] = Field(default_factory=dict, alias="allInt")
    all_long: Dict[str, Int64] = Field(default_factory=dict, alias="allLong")
    all_bool: Dict[str, StrictBool] = Field(default_factory=dict, alias="allBool")
    all_float: Dict[str, float] = Field(default_factory=dict, alias="allFloat")
    all_double: Dict[str, float] = Field(default_factory=dict, alias="allDouble")

    @field_validator("*", mode="before")
    @classmethod
    def _null_table_is_empty(cls, v: Any) -> Any:
        # a table saved as null loads as an empty one
        return {} if v is None else v

    def table(self, kind: ValueKind) -> Dict[str, Any]:
        return getattr(self, _ATTRS[kind])

    def to_payload(self) -> Dict[str, Dict[str, Any]]:
        """Plain dict keyed by the on-disk field names."""
        return self.model_dump(by_alias=True)
