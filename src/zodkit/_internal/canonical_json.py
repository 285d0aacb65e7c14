"""Centralized canonical JSON serialization.

Used wherever issue lists are rendered as JSON (ZodError.to_json, test
snapshots) so that the same failure always serializes to the same bytes.
"""

import datetime
import json
from enum import Enum
from typing import Any


def _fallback(obj: Any) -> Any:
    """Render values JSON has no type for: enums by value, times as ISO-8601, the rest via str()."""
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=repr)
    if isinstance(obj, tuple):
        return list(obj)
    return str(obj)


def canonical_dumps(obj: Any) -> str:
    """
    Canonical JSON serialization for byte-stable output.

    Rules:
    - UTF-8 encoding
    - Sorted keys
    - Stable separators (",", ":")
    - Deterministic list ordering (lists must already be ordered before calling)
    - Non-JSON values rendered through a fixed fallback

    Args:
        obj: Python object to serialize

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_fallback,
    )
