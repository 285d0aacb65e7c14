"""Issue model: raw issues collected during a parse, finalized issues handed to callers.

Raw issues are cheap mutable records carrying a code, the offending input,
a path relative to the schema that produced them, and code-specific
properties. They are finalized once, at the parse boundary, where the
message is resolved through the error-map chain:

1. the issue's own message (set by a check-level error override)
2. the producing schema's error override
3. the parse context's error map
4. the global ``custom_error`` and ``locale_error`` maps
5. the built-in English formatter
"""

import datetime
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from zodkit.codes import IssueCode
from zodkit.kernel.ref import Ref
from zodkit.kernel.messages import default_message


PathAtom = Any
ErrorMap = Callable[["RawIssue"], Optional[str]]

# Properties lifted into typed fields on the finalized Issue.
_ISSUE_FIELDS = (
    "expected",
    "received",
    "origin",
    "minimum",
    "maximum",
    "inclusive",
    "exact",
    "divisor",
    "format",
    "pattern",
    "keys",
    "values",
)


@dataclass
class RawIssue:
    """An unfinalized issue. Paths are relative to the payload that holds it."""

    code: IssueCode
    input: Any = None
    path: List[PathAtom] = field(default_factory=list)
    message: Optional[str] = None
    properties: Dict[str, Any] = field(default_factory=dict)
    inst: Any = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    @property
    def expected(self) -> Optional[str]:
        return self.properties.get("expected")

    @property
    def received(self) -> Optional[str]:
        return self.properties.get("received")

    @property
    def origin(self) -> Optional[str]:
        return self.properties.get("origin")

    def with_prefix(self, *atoms: PathAtom) -> "RawIssue":
        """Prepend path atoms in place and return self."""
        self.path[0:0] = atoms
        return self


class Issue(BaseModel):
    """A finalized, user-facing issue with its message resolved and its path frozen."""

    code: IssueCode
    message: str
    path: Tuple[Any, ...] = ()
    input: Any = None
    expected: Optional[str] = None
    received: Optional[str] = None
    origin: Optional[str] = None
    minimum: Any = None
    maximum: Any = None
    inclusive: Optional[bool] = None
    exact: Optional[bool] = None
    divisor: Any = None
    format: Optional[str] = None
    pattern: Optional[str] = None
    keys: Optional[Tuple[Any, ...]] = None
    values: Optional[Tuple[Any, ...]] = None
    errors: Optional[Tuple[Tuple["Issue", ...], ...]] = None
    issues: Optional[Tuple["Issue", ...]] = None
    params: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form with unset optional fields dropped."""
        out = self.model_dump(exclude_none=True, mode="python")
        if not out.get("params"):
            out.pop("params", None)
        out["code"] = self.code.value
        out["path"] = list(self.path)
        return out


Issue.model_rebuild()


# ---------------------------------------------------------------------------
# Error maps
# ---------------------------------------------------------------------------

def to_error_map(value: Any) -> Optional[ErrorMap]:
    """Normalize a user-supplied error override into an error-map callable.

    Accepts ``None``, a fixed message string, a mapping from issue code
    (``IssueCode`` or its string value) to message, or a callable taking
    the raw issue and returning a message (or ``None`` to defer).

    Raises:
        TypeError: If the value is none of the above.
    """
    if value is None:
        return None
    if isinstance(value, str):
        message = value
        return lambda issue: message
    if isinstance(value, Mapping):
        table = {_code_key(k): v for k, v in value.items()}
        return lambda issue: table.get(issue.code.value)
    if callable(value):
        return value
    raise TypeError(f"error override must be a string, mapping or callable, got {type(value).__name__}")


def _code_key(code: Any) -> str:
    return code.value if isinstance(code, Enum) else str(code)


def _resolve(error_map: Optional[ErrorMap], raw: RawIssue) -> Optional[str]:
    if error_map is None:
        return None
    result = error_map(raw)
    return result or None


# ---------------------------------------------------------------------------
# Received-type naming
# ---------------------------------------------------------------------------

def parsed_type(value: Any) -> str:
    """Name the runtime type of an input, in the vocabulary used by messages."""
    if isinstance(value, Ref):
        value = value.value
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return "float"
    if isinstance(value, complex):
        return "complex"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    if isinstance(value, datetime.datetime):
        return "time"
    if isinstance(value, Enum):
        return "enum"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, tuple):
        return "array"
    if isinstance(value, list):
        return "slice"
    if isinstance(value, (set, frozenset)):
        return "set"
    if callable(value):
        return "function"
    return type(value).__name__


def _type_name(code: Any) -> str:
    return code.value if isinstance(code, Enum) else str(code)


# ---------------------------------------------------------------------------
# Creators
# ---------------------------------------------------------------------------

def invalid_type_issue(expected: Any, value: Any, **properties: Any) -> RawIssue:
    props = {"expected": _type_name(expected), "received": parsed_type(value)}
    props.update(properties)
    return RawIssue(IssueCode.INVALID_TYPE, value, properties=props)


def invalid_value_issue(values: Sequence[Any], value: Any) -> RawIssue:
    return RawIssue(IssueCode.INVALID_VALUE, value, properties={"values": list(values)})


def too_small_issue(
    minimum: Any,
    inclusive: bool,
    origin: str,
    value: Any,
    exact: bool = False,
) -> RawIssue:
    props = {"minimum": minimum, "inclusive": inclusive, "origin": origin}
    if exact:
        props["exact"] = True
    return RawIssue(IssueCode.TOO_SMALL, value, properties=props)


def too_big_issue(
    maximum: Any,
    inclusive: bool,
    origin: str,
    value: Any,
    exact: bool = False,
) -> RawIssue:
    props = {"maximum": maximum, "inclusive": inclusive, "origin": origin}
    if exact:
        props["exact"] = True
    return RawIssue(IssueCode.TOO_BIG, value, properties=props)


def fixed_length_issue(arity: int, actual: int, value: Any) -> RawIssue:
    """Arity mismatch for a fixed-length array: one exact too_small or too_big issue."""
    if actual < arity:
        return too_small_issue(arity, True, "array", value, exact=True)
    return too_big_issue(arity, True, "array", value, exact=True)


def not_multiple_of_issue(divisor: Any, origin: str, value: Any) -> RawIssue:
    return RawIssue(
        IssueCode.NOT_MULTIPLE_OF, value, properties={"divisor": divisor, "origin": origin}
    )


def invalid_format_issue(fmt: str, value: Any, **properties: Any) -> RawIssue:
    props = {"format": fmt, "origin": "string"}
    props.update(properties)
    return RawIssue(IssueCode.INVALID_FORMAT, value, properties=props)


def unrecognized_keys_issue(keys: Sequence[Any], value: Any) -> RawIssue:
    return RawIssue(IssueCode.UNRECOGNIZED_KEYS, value, properties={"keys": list(keys)})


def invalid_union_issue(errors: Sequence[Sequence[RawIssue]], value: Any, **properties: Any) -> RawIssue:
    props: Dict[str, Any] = {"errors": [list(option) for option in errors]}
    props.update(properties)
    return RawIssue(IssueCode.INVALID_UNION, value, properties=props)


def invalid_key_issue(key: Any, origin: str, issues: Sequence[RawIssue], value: Any) -> RawIssue:
    return RawIssue(
        IssueCode.INVALID_KEY,
        value,
        path=[key],
        properties={"origin": origin, "issues": list(issues)},
    )


def custom_issue(message: Optional[str], value: Any, **properties: Any) -> RawIssue:
    return RawIssue(IssueCode.CUSTOM, value, message=message or None, properties=dict(properties))


def non_optional_issue(expected: Any, value: Any = None) -> RawIssue:
    return RawIssue(
        IssueCode.NON_OPTIONAL_ABSENT,
        value,
        properties={"expected": _type_name(expected), "received": parsed_type(value)},
    )


def construction_failed_issue(reason: str, value: Any) -> RawIssue:
    return RawIssue(IssueCode.CONSTRUCTION_FAILED, value, properties={"reason": reason})


# ---------------------------------------------------------------------------
# Finalization and the reverse converter
# ---------------------------------------------------------------------------

def finalize_issue(
    raw: RawIssue,
    error_map: Optional[ErrorMap] = None,
    config: Any = None,
    report_input: bool = False,
    prefix: Sequence[PathAtom] = (),
) -> Issue:
    """Resolve a raw issue's message and freeze it into an Issue.

    Args:
        raw: The issue collected during parsing.
        error_map: The parse context's error map, if any.
        config: A ZodConfig snapshot; its ``custom_error`` and
            ``locale_error`` maps are consulted after the context map.
        report_input: Keep the offending input on the finalized issue.
        prefix: Path prefix of the parse invocation.

    Returns:
        The finalized Issue.
    """
    message = raw.message
    if not message:
        inst_error = getattr(raw.inst, "error", None)
        message = _resolve(inst_error, raw) or _resolve(error_map, raw)
    if not message and config is not None:
        message = _resolve(config.custom_error, raw) or _resolve(config.locale_error, raw)
    if not message:
        message = default_message(raw)

    data: Dict[str, Any] = {
        "code": raw.code,
        "message": message,
        "path": tuple(prefix) + tuple(raw.path),
    }
    if report_input:
        data["input"] = raw.input

    params: Dict[str, Any] = {}
    for key, val in raw.properties.items():
        if key == "errors":
            data["errors"] = tuple(
                tuple(finalize_issue(i, error_map, config, report_input) for i in option)
                for option in val
            )
        elif key == "issues":
            data["issues"] = tuple(
                finalize_issue(i, error_map, config, report_input) for i in val
            )
        elif key in ("keys", "values"):
            data[key] = tuple(val)
        elif key in _ISSUE_FIELDS:
            data[key] = val
        else:
            params[key] = val
    data["params"] = params
    return Issue(**data)


def issue_to_raw(issue: Issue) -> RawIssue:
    """Convert a finalized issue back into a raw one.

    Used when an error raised inside a user callback is folded into the
    surrounding payload; the resolved message is kept as the override.
    """
    props: Dict[str, Any] = dict(issue.params)
    for key in _ISSUE_FIELDS:
        val = getattr(issue, key)
        if val is not None:
            props[key] = list(val) if key in ("keys", "values") else val
    if issue.errors is not None:
        props["errors"] = [[issue_to_raw(i) for i in option] for option in issue.errors]
    if issue.issues is not None:
        props["issues"] = [issue_to_raw(i) for i in issue.issues]
    return RawIssue(
        code=issue.code,
        input=issue.input,
        path=list(issue.path),
        message=issue.message,
        properties=props,
    )


IssueLike = Union[RawIssue, str, Mapping]


def coerce_issue(issue: IssueLike, value: Any) -> RawIssue:
    """Accept the loose forms user callbacks may hand to ``add_issue``.

    A string becomes a custom issue with that message. A mapping is read
    as ``{"code": ..., "message": ..., "path": [...], **properties}``.
    """
    if isinstance(issue, RawIssue):
        return issue
    if isinstance(issue, str):
        return custom_issue(issue, value)
    if isinstance(issue, Mapping):
        data = dict(issue)
        code = IssueCode(data.pop("code", IssueCode.CUSTOM))
        message = data.pop("message", None)
        path = list(data.pop("path", []) or [])
        raw_input = data.pop("input", value)
        return RawIssue(code, raw_input, path=path, message=message, properties=data)
    raise TypeError(f"cannot build an issue from {type(issue).__name__}")
