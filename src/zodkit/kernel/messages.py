"""Built-in English messages, the last stop of the error-map chain."""

import datetime
import math
from enum import Enum
from typing import Any, Iterable, Optional

from zodkit.codes import IssueCode

# Units for origins whose bounds count elements rather than magnitude.
SIZING_UNITS = {
    "string": "characters",
    "file": "bytes",
    "array": "items",
    "slice": "items",
    "set": "items",
    "object": "keys",
    "record": "keys",
    "map": "keys",
}

FORMAT_NOUNS = {
    "regex": "input",
    "email": "email address",
    "url": "URL",
    "uuid": "UUID",
    "guid": "GUID",
    "nanoid": "nanoid",
    "cuid": "cuid",
    "cuid2": "cuid2",
    "ulid": "ULID",
    "xid": "XID",
    "ksuid": "KSUID",
    "datetime": "ISO datetime",
    "date": "ISO date",
    "time": "ISO time",
    "duration": "ISO duration",
    "ipv4": "IPv4 address",
    "ipv6": "IPv6 address",
    "cidrv4": "IPv4 range",
    "cidrv6": "IPv6 range",
    "base64": "base64-encoded string",
    "base64url": "base64url-encoded string",
    "e164": "E.164 number",
    "jwt": "JWT",
    "lowercase": "lowercase string",
    "uppercase": "uppercase string",
}


def stringify_primitive(value: Any) -> str:
    """Render a value the way it appears inside messages."""
    if isinstance(value, Enum):
        return stringify_primitive(value.value)
    if isinstance(value, str):
        return f'"{value}"'
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
    return format_threshold(value)


def join_values(values: Iterable[Any], separator: str = "|") -> str:
    return separator.join(stringify_primitive(v) for v in values)


def format_threshold(threshold: Any) -> str:
    if isinstance(threshold, bool):
        return str(threshold).lower()
    if isinstance(threshold, float) and threshold.is_integer():
        return str(int(threshold))
    if isinstance(threshold, datetime.datetime):
        return threshold.isoformat()
    return str(threshold)


def _comparison(inclusive: bool, too_small: bool) -> str:
    if too_small:
        return "at least " if inclusive else "more than "
    return "at most " if inclusive else "less than "


def _size_message(raw: Any, too_small: bool) -> str:
    origin = raw.get("origin") or "value"
    threshold = raw.get("minimum") if too_small else raw.get("maximum")
    label = "Too small" if too_small else "Too big"
    if threshold is None:
        return label

    unit = SIZING_UNITS.get(origin)
    if raw.get("exact"):
        adj = "exactly "
    else:
        adj = _comparison(raw.get("inclusive", True), too_small)
    if unit is not None:
        return f"{label}: expected {origin} to have {adj}{format_threshold(threshold)} {unit}"
    return f"{label}: expected {origin} to be {adj}{format_threshold(threshold)}"


def _format_message(raw: Any) -> str:
    fmt = raw.get("format")
    if fmt == "starts_with":
        return f"Invalid string: must start with {stringify_primitive(raw.get('prefix'))}"
    if fmt == "ends_with":
        return f"Invalid string: must end with {stringify_primitive(raw.get('suffix'))}"
    if fmt == "includes":
        return f"Invalid string: must include {stringify_primitive(raw.get('includes'))}"
    if fmt == "regex":
        pattern = raw.get("pattern")
        if pattern:
            return f"Invalid string: must match pattern {pattern}"
        return "Invalid string: must match pattern"
    if not fmt:
        return "Invalid format"
    return f"Invalid {FORMAT_NOUNS.get(fmt, fmt)}"


def default_message(raw: Any) -> str:
    """Produce the default message for a raw issue."""
    code = raw.code
    if code == IssueCode.INVALID_TYPE:
        return f"Invalid input: expected {raw.get('expected')}, received {raw.get('received')}"
    if code == IssueCode.INVALID_VALUE:
        values = raw.get("values") or []
        if len(values) == 1:
            return f"Invalid input: expected {stringify_primitive(values[0])}"
        if not values:
            return "Invalid value"
        return f"Invalid option: expected one of {join_values(values)}"
    if code == IssueCode.TOO_SMALL:
        return _size_message(raw, True)
    if code == IssueCode.TOO_BIG:
        return _size_message(raw, False)
    if code == IssueCode.NOT_MULTIPLE_OF:
        return f"Invalid number: must be a multiple of {format_threshold(raw.get('divisor'))}"
    if code == IssueCode.INVALID_FORMAT:
        return _format_message(raw)
    if code == IssueCode.UNRECOGNIZED_KEYS:
        keys = raw.get("keys") or []
        noun = "key" if len(keys) == 1 else "keys"
        if not keys:
            return "Unrecognized key(s) in object"
        return f"Unrecognized {noun}: {join_values(keys, ', ')}"
    if code == IssueCode.INVALID_UNION:
        if raw.get("inclusive") is False:
            return "Invalid input: more than one union member matched"
        return "Invalid input: no union member matched"
    if code == IssueCode.INVALID_KEY:
        return f"Invalid key in {raw.get('origin') or 'record'}"
    if code == IssueCode.INVALID_ELEMENT:
        return f"Invalid value in {raw.get('origin') or 'map'}"
    if code == IssueCode.NON_OPTIONAL_ABSENT:
        return f"Invalid input: expected {raw.get('expected')}, received nil"
    if code == IssueCode.CONSTRUCTION_FAILED:
        reason: Optional[str] = raw.get("reason")
        return f"Invalid schema: {reason}" if reason else "Invalid schema definition"
    if code == IssueCode.CUSTOM:
        if raw.message:
            return raw.message
        if raw.get("check") == "unique":
            return "Invalid input: expected unique items"
        return "Invalid input"
    return "Invalid input"
