"""Best-effort conversions applied when a schema's coerce flag is set.

Each function returns the converted value or raises ValueError /
TypeError / OverflowError; the engine turns any of those into an
invalid_type issue.
"""

import datetime
import math
import re
from decimal import Decimal
from enum import Enum
from typing import Any

COERCION_ERRORS = (ValueError, TypeError, OverflowError, ArithmeticError)

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on", "y"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off", "n", ""})

# Matches the numeric-string shape accepted for record keys and coercion.
NUMERIC_STRING = re.compile(r"^-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?$")


def is_numeric_string(s: str) -> bool:
    return bool(NUMERIC_STRING.match(s.strip()))


def to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, Enum):
        return to_string(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, Decimal)):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, complex):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    raise TypeError(f"cannot coerce {type(value).__name__} to string")


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ValueError(f"cannot coerce {value!r} to bool")
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    raise TypeError(f"cannot coerce {type(value).__name__} to bool")


def to_integer(value: Any) -> int:
    """Integers pass through; integral floats and numeric strings convert; bools are refused."""
    if isinstance(value, bool):
        raise TypeError("refusing to coerce bool to integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value!r} is not a whole number")
        return int(value)
    if isinstance(value, Decimal):
        if value != value.to_integral_value():
            raise ValueError(f"{value!r} is not a whole number")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            number = float(text)
            if not number.is_integer():
                raise ValueError(f"{value!r} is not a whole number")
            return int(number)
    raise TypeError(f"cannot coerce {type(value).__name__} to integer")


def to_float(value: Any) -> float:
    if isinstance(value, float):
        return value
    if isinstance(value, (bool, int, Decimal)):
        return float(value)
    if isinstance(value, str):
        return float(value.strip())
    raise TypeError(f"cannot coerce {type(value).__name__} to float")


def to_complex(value: Any) -> complex:
    if isinstance(value, complex):
        return value
    if isinstance(value, bool):
        raise TypeError("refusing to coerce bool to complex")
    if isinstance(value, (int, float, Decimal)):
        return complex(float(value))
    if isinstance(value, str):
        return complex(value.strip().replace(" ", ""))
    raise TypeError(f"cannot coerce {type(value).__name__} to complex")


def to_time(value: Any) -> datetime.datetime:
    """ISO-8601 strings (a trailing ``Z`` included) and Unix timestamps (UTC)."""
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise TypeError("refusing to coerce bool to time")
    if isinstance(value, (int, float)):
        return datetime.datetime.fromtimestamp(value, tz=datetime.timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return datetime.datetime.fromisoformat(text)
    raise TypeError(f"cannot coerce {type(value).__name__} to time")
