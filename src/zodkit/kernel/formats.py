"""String format predicates used by the string schema's format checks."""

import base64
import binascii
import ipaddress
import json
import re
from typing import Callable, Dict
from urllib.parse import urlparse

_DATE = (
    r"(?:(?:\d\d[2468][048]|\d\d[13579][26]|\d\d0[48]|[02468][048]00|[13579][26]00)-02-29"
    r"|\d{4}-(?:(?:0[13578]|1[02])-(?:0[1-9]|[12]\d|3[01])"
    r"|(?:0[469]|11)-(?:0[1-9]|[12]\d|30)|02-(?:0[1-9]|1\d|2[0-8])))"
)
_TIME = r"(?:[01]\d|2[0-3]):[0-5]\d(?::[0-5]\d(?:\.\d+)?)?"
_OFFSET = r"(?:Z|[+-](?:[01]\d|2[0-3]):?[0-5]\d)"

PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "email": re.compile(
        r"^(?!\.)(?!.*\.\.)([A-Za-z0-9_'+\-\.]*)[A-Za-z0-9_+-]@([A-Za-z0-9][A-Za-z0-9\-]*\.)+[A-Za-z]{2,}$"
    ),
    "uuid": re.compile(
        r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[1-8][0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}$"
        r"|^00000000-0000-0000-0000-000000000000$"
        r"|^[fF]{8}-[fF]{4}-[fF]{4}-[fF]{4}-[fF]{12}$"
    ),
    "guid": re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"),
    "cuid": re.compile(r"^[cC][^\s-]{8,}$"),
    "cuid2": re.compile(r"^[0-9a-z]+$"),
    "ulid": re.compile(r"^[0-9A-HJKMNP-TV-Za-hjkmnp-tv-z]{26}$"),
    "xid": re.compile(r"^[0-9a-vA-V]{20}$"),
    "ksuid": re.compile(r"^[A-Za-z0-9]{27}$"),
    "nanoid": re.compile(r"^[A-Za-z0-9_-]{21}$"),
    "e164": re.compile(r"^\+[1-9]\d{6,14}$"),
    "base64url": re.compile(r"^[A-Za-z0-9_-]*={0,2}$"),
    "date": re.compile(rf"^{_DATE}$"),
    "time": re.compile(rf"^{_TIME}$"),
    "datetime": re.compile(rf"^{_DATE}T{_TIME}{_OFFSET}?$"),
    "duration": re.compile(
        r"^P(?:\d+W|(?:\d+Y)?(?:\d+M)?(?:\d+D)?(?:T(?:\d+H)?(?:\d+M)?(?:\d+(?:[.,]\d+)?S)?)?)$"
    ),
}


def _matches(name: str) -> Callable[[str], bool]:
    pattern = PATTERNS[name]
    return lambda value: pattern.match(value) is not None


def is_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


def is_ipv4(value: str) -> bool:
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_ipv6(value: str) -> bool:
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


def is_cidrv4(value: str) -> bool:
    if "/" not in value:
        return False
    try:
        ipaddress.IPv4Network(value, strict=False)
    except ValueError:
        return False
    return True


def is_cidrv6(value: str) -> bool:
    if "/" not in value:
        return False
    try:
        ipaddress.IPv6Network(value, strict=False)
    except ValueError:
        return False
    return True


def is_base64(value: str) -> bool:
    if value == "":
        return True
    if len(value) % 4:
        return False
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def is_base64url(value: str) -> bool:
    if not PATTERNS["base64url"].match(value):
        return False
    padded = value + "=" * (-len(value) % 4)
    try:
        base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError):
        return False
    return True


def is_jwt(value: str) -> bool:
    """Three base64url segments whose header decodes to a JSON object with ``typ`` or ``alg``."""
    parts = value.split(".")
    if len(parts) != 3:
        return False
    header = parts[0]
    if not header or not is_base64url(header):
        return False
    try:
        decoded = json.loads(base64.urlsafe_b64decode(header + "=" * (-len(header) % 4)))
    except (binascii.Error, ValueError):
        return False
    return isinstance(decoded, dict) and ("typ" in decoded or "alg" in decoded)


FORMAT_PREDICATES: Dict[str, Callable[[str], bool]] = {
    "email": _matches("email"),
    "url": is_url,
    "uuid": _matches("uuid"),
    "guid": _matches("guid"),
    "ipv4": is_ipv4,
    "ipv6": is_ipv6,
    "cidrv4": is_cidrv4,
    "cidrv6": is_cidrv6,
    "base64": is_base64,
    "base64url": is_base64url,
    "jwt": is_jwt,
    "e164": _matches("e164"),
    "datetime": _matches("datetime"),
    "date": _matches("date"),
    "time": _matches("time"),
    "duration": _matches("duration"),
    "cuid": _matches("cuid"),
    "cuid2": _matches("cuid2"),
    "ulid": _matches("ulid"),
    "xid": _matches("xid"),
    "ksuid": _matches("ksuid"),
    "nanoid": _matches("nanoid"),
}
