"""
Helpers for reading loosely-typed JSON request bodies.

Partial updates need to tell apart a field that was left out of the body
from one that was sent empty. `FieldInput.read` makes that explicit:

    UNSET  - key absent from the body
    CLEAR  - key present with null or ""
    VALUE  - anything else, carried in `.value`

Each caller decides what CLEAR means for its own field.
"""
import enum
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from serviceshop.errors import ValidationError

# largest value a SQL INTEGER column holds
SQL_INT_MAX = 2**63 - 1


class FieldState(enum.Enum):
    UNSET = "unset"
    CLEAR = "clear"
    VALUE = "value"


@dataclass(frozen=True)
class FieldInput:
    state: FieldState
    value: Any = None

    @classmethod
    def read(cls, payload: Dict, name: str) -> "FieldInput":
        if name not in payload:
            return cls(FieldState.UNSET)
        value = payload[name]
        if value is None or (isinstance(value, str) and value == ""):
            return cls(FieldState.CLEAR)
        return cls(FieldState.VALUE, value)

    @property
    def is_unset(self) -> bool:
        return self.state is FieldState.UNSET

    @property
    def is_clear(self) -> bool:
        return self.state is FieldState.CLEAR

    @property
    def has_value(self) -> bool:
        return self.state is FieldState.VALUE


def missing_fields(payload: Dict, names: Iterable[str]) -> List[str]:
    """Names whose value is absent or falsy (None, "", 0, False, empty list)."""
    return [n for n in names if not payload.get(n)]


def to_number(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", {field: "not a number"})
    if isinstance(value, (int, float)):
        num = float(value)
    elif isinstance(value, str):
        try:
            num = float(value.strip())
        except ValueError:
            raise ValidationError(f"{field} must be a number", {field: "not a number"})
    else:
        raise ValidationError(f"{field} must be a number", {field: "not a number"})
    if math.isnan(num) or math.isinf(num):
        raise ValidationError(f"{field} must be a number", {field: "not a number"})
    return num


def to_non_negative_int(value: Any, field: str) -> int:
    num = to_number(value, field)
    if not num.is_integer():
        raise ValidationError(f"{field} must be a whole number", {field: "not an integer"})
    if num < 0:
        raise ValidationError(f"{field} cannot be negative", {field: "must be >= 0"})
    if num > SQL_INT_MAX:
        raise ValidationError(f"{field} is too large", {field: f"must be <= {SQL_INT_MAX}"})
    return int(num)


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 string, a datetime, or epoch milliseconds.
    Returns None when the value cannot be understood.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def to_string_list(value: Any) -> List[str]:
    """A list stays a list, a single value becomes a one-element list, blanks become []."""
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    if not value:
        return []
    return [str(value)]
