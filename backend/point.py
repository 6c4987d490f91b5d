"""
Point snapshots produced by simulated measurements, and the coercion of their
field values into the float samples carried on the wire.
"""
from enum import Enum
from datetime import datetime
from typing import Any, List, Optional
from dataclasses import dataclass, field

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class FieldKind(Enum):
    """The closed set of value kinds a measurement field may hold."""
    INT = "int"
    INT64 = "int64"
    FLOAT = "float"


class UnsupportedFieldValueError(TypeError):
    """A measurement produced a field value outside the supported kinds."""

    def __init__(self, field_name: str, value: Any):
        self.field_name = field_name
        self.value_type = type(value).__name__
        super().__init__(f"Cannot convert field {field_name} with value type: {self.value_type}")


@dataclass
class Point:
    """One measurement's momentary field values."""
    measurement_name: str = ""
    timestamp: Optional[datetime] = None
    field_keys: List[str] = field(default_factory=list)
    field_values: List[Any] = field(default_factory=list)

    def append_field(self, key: str, value: Any) -> None:
        self.field_keys.append(key)
        self.field_values.append(value)

    def reset(self) -> None:
        self.measurement_name = ""
        self.timestamp = None
        self.field_keys.clear()
        self.field_values.clear()


def make_usable_point() -> Point:
    return Point()


def field_kind(value: Any) -> Optional[FieldKind]:
    """
    Classify a field value, returning None for anything unsupported.

    Python has a single ``int`` type, so the native and 64-bit integer kinds
    are told apart by range. ``bool`` is rejected even though it subclasses int.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        if INT32_MIN <= value <= INT32_MAX:
            return FieldKind.INT
        if INT64_MIN <= value <= INT64_MAX:
            return FieldKind.INT64
        return None
    if isinstance(value, float):
        return FieldKind.FLOAT
    return None


def coerce_field_value(field_name: str, value: Any) -> float:
    """Convert a field value to a float sample value."""
    kind = field_kind(value)
    if kind is FieldKind.INT or kind is FieldKind.INT64:
        return float(value)
    if kind is FieldKind.FLOAT:
        return value
    raise UnsupportedFieldValueError(field_name, value)
