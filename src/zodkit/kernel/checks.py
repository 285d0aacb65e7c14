"""Check protocol and the built-in check catalog.

A check is a decision plus an issue code. Checks append issues to the
payload they are given; only OverwriteCheck replaces the payload value.
Each check also exposes a CheckDefinition (kind + parameters) so that
schemas can describe and rebuild themselves.
"""

import inspect
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator

from zodkit.codes import IssueCode
from zodkit.errors import ZodError
from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.internals import PATTERNS
from zodkit.kernel.issues import (
    ErrorMap,
    RawIssue,
    custom_issue,
    invalid_format_issue,
    invalid_type_issue,
    invalid_value_issue,
    issue_to_raw,
    not_multiple_of_issue,
    to_error_map,
    too_big_issue,
    too_small_issue,
)

MAX_SAFE_INTEGER = 2 ** 53 - 1
MIN_SAFE_INTEGER = -(2 ** 53 - 1)


class CheckParams(BaseModel):
    """Options accepted by every check-adding method.

    - error: message, code->message mapping, or error-map callable
    - abort: stop running later checks when this one fails
    - when: predicate over the payload; the check is skipped when it returns False
    - path: extra path atoms appended to issues from refine-style checks
    - params: extra properties copied onto custom issues
    - code: issue code for refine-style checks (defaults to custom)
    """

    error: Optional[Callable[..., Optional[str]]] = None
    abort: bool = False
    when: Optional[Callable[[ParsePayload], bool]] = None
    path: List[Any] = []
    params: Dict[str, Any] = {}
    code: IssueCode = IssueCode.CUSTOM

    model_config = ConfigDict(extra="ignore", arbitrary_types_allowed=True)

    @field_validator("error", mode="before")
    @classmethod
    def normalize_error(cls, v: Any) -> Any:
        return to_error_map(v)


def normalize_check_params(params: Any = None, **kwargs: Any) -> CheckParams:
    """Same loose forms as schema params: None, message string, mapping, or CheckParams."""
    if isinstance(params, CheckParams):
        data: Dict[str, Any] = params.model_dump()
    elif isinstance(params, str):
        data = {"error": params}
    elif isinstance(params, Mapping):
        data = dict(params)
    elif params is None:
        data = {}
    else:
        raise TypeError(f"unsupported check params: {type(params).__name__}")
    data.update(kwargs)
    return CheckParams.model_validate(data)


@dataclass(frozen=True)
class CheckDefinition:
    """Kind plus parameters; enough to describe or re-create a check."""

    kind: str
    params: Dict[str, Any] = field(default_factory=dict)


class Check:
    """Base class for validation rules applied after type recognition."""

    kind = "check"
    # Whether the engine should run this check when a nilable ref schema sees None.
    accepts_nil = False

    def __init__(self, params: Optional[CheckParams] = None) -> None:
        params = params or CheckParams()
        self.error: Optional[ErrorMap] = params.error
        self.abort = params.abort
        self.when = params.when

    def definition(self) -> CheckDefinition:
        return CheckDefinition(self.kind, self._definition_params())

    def _definition_params(self) -> Dict[str, Any]:
        return {}

    def on_attach(self, internals: Any) -> None:
        """Hook run when the check is added to a schema's internals."""

    def apply(self, payload: ParsePayload, ctx: ParseContext) -> None:
        if self.when is not None and not self.when(payload):
            return
        start = len(payload.issues)
        self._check(payload, ctx)
        for issue in payload.issues[start:]:
            if issue.inst is None:
                issue.inst = self
            if self.error is not None and not issue.message:
                issue.message = self.error(issue) or None

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self._definition_params().items())
        return f"{type(self).__name__}({params})"


def run_checks(checks: Sequence[Check], payload: ParsePayload, ctx: ParseContext) -> None:
    """Apply checks in declaration order, stopping after a failing abort check."""
    for check in checks:
        before = len(payload.issues)
        check.apply(payload, ctx)
        if check.abort and len(payload.issues) > before:
            break


# ---------------------------------------------------------------------------
# Size / length
# ---------------------------------------------------------------------------

class MinSize(Check):
    kind = "min_size"

    def __init__(self, minimum: int, origin: str, params: Optional[CheckParams] = None) -> None:
        super().__init__(params)
        self.minimum = minimum
        self.origin = origin

    def _definition_params(self) -> Dict[str, Any]:
        return {"minimum": self.minimum, "origin": self.origin}

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if value is None:
            return
        if len(value) < self.minimum:
            payload.add_issue(too_small_issue(self.minimum, True, self.origin, value))


class MaxSize(Check):
    kind = "max_size"

    def __init__(self, maximum: int, origin: str, params: Optional[CheckParams] = None) -> None:
        super().__init__(params)
        self.maximum = maximum
        self.origin = origin

    def _definition_params(self) -> Dict[str, Any]:
        return {"maximum": self.maximum, "origin": self.origin}

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if value is None:
            return
        if len(value) > self.maximum:
            payload.add_issue(too_big_issue(self.maximum, True, self.origin, value))


class ExactSize(Check):
    """Exact length (``length`` for strings, ``size`` for collections)."""

    kind = "size"

    def __init__(self, size: int, origin: str, params: Optional[CheckParams] = None, kind: str = "size") -> None:
        super().__init__(params)
        self.size = size
        self.origin = origin
        self.kind = kind

    def _definition_params(self) -> Dict[str, Any]:
        return {"size": self.size, "origin": self.origin}

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if value is None:
            return
        actual = len(value)
        if actual < self.size:
            payload.add_issue(too_small_issue(self.size, True, self.origin, value, exact=True))
        elif actual > self.size:
            payload.add_issue(too_big_issue(self.size, True, self.origin, value, exact=True))


# ---------------------------------------------------------------------------
# Range and numeric semantics
# ---------------------------------------------------------------------------

class RangeCheck(Check):
    """gt / gte / lt / lte against a fixed bound.

    Lower bounds emit too_small and upper bounds emit too_big, with
    ``inclusive`` telling the two flavours apart.
    """

    _LOWER = {"gt": False, "gte": True}
    _UPPER = {"lt": False, "lte": True}

    def __init__(self, kind: str, bound: Any, origin: str, params: Optional[CheckParams] = None) -> None:
        if kind not in self._LOWER and kind not in self._UPPER:
            raise ValueError(f"unknown range check kind: {kind}")
        super().__init__(params)
        self.kind = kind
        self.bound = bound
        self.origin = origin

    def _definition_params(self) -> Dict[str, Any]:
        return {"value": self.bound, "origin": self.origin}

    def on_attach(self, internals: Any) -> None:
        key = "minimum" if self.kind in self._LOWER else "maximum"
        internals.bag[key] = self.bound

    def _operands(self, value: Any) -> Tuple[Any, Any]:
        return value, self.bound

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if value is None:
            return
        left, right = self._operands(value)
        if self.kind in self._LOWER:
            inclusive = self._LOWER[self.kind]
            ok = left >= right if inclusive else left > right
            if not ok:
                payload.add_issue(too_small_issue(self.bound, inclusive, self.origin, value))
        else:
            inclusive = self._UPPER[self.kind]
            ok = left <= right if inclusive else left < right
            if not ok:
                payload.add_issue(too_big_issue(self.bound, inclusive, self.origin, value))


class MultipleOfCheck(Check):
    kind = "multiple_of"

    def __init__(self, divisor: Any, origin: str, params: Optional[CheckParams] = None) -> None:
        if divisor == 0:
            raise ValueError("multiple_of divisor must be non-zero")
        super().__init__(params)
        self.divisor = divisor
        self.origin = origin

    def _definition_params(self) -> Dict[str, Any]:
        return {"divisor": self.divisor, "origin": self.origin}

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if value is None:
            return
        if not _is_multiple(value, self.divisor):
            payload.add_issue(not_multiple_of_issue(self.divisor, self.origin, value))


def _is_multiple(value: Any, divisor: Any) -> bool:
    if isinstance(value, int) and isinstance(divisor, int):
        return value % divisor == 0
    if isinstance(value, float) and not math.isfinite(value):
        return False
    quotient = value / divisor
    return math.isclose(quotient, round(quotient), rel_tol=1e-9, abs_tol=1e-9)


class IntegerCheck(Check):
    """Floats must hold an integral value."""

    kind = "integer"

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if value is None:
            return
        if isinstance(value, float) and not value.is_integer():
            payload.add_issue(invalid_type_issue("int", value))


class FiniteCheck(Check):
    kind = "finite"

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if value is None:
            return
        if isinstance(value, float) and not math.isfinite(value):
            payload.add_issue(invalid_type_issue("number", value))


class SafeCheck(Check):
    """Value must lie in the exactly-representable integer range of a double."""

    kind = "safe"

    def __init__(self, origin: str, params: Optional[CheckParams] = None) -> None:
        super().__init__(params)
        self.origin = origin

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if value is None:
            return
        if value < MIN_SAFE_INTEGER:
            payload.add_issue(too_small_issue(MIN_SAFE_INTEGER, True, self.origin, value))
        elif value > MAX_SAFE_INTEGER:
            payload.add_issue(too_big_issue(MAX_SAFE_INTEGER, True, self.origin, value))


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------

class RegexCheck(Check):
    kind = "regex"

    def __init__(
        self,
        pattern: Union[str, "re.Pattern[str]"],
        params: Optional[CheckParams] = None,
        fmt: str = "regex",
    ) -> None:
        super().__init__(params)
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.format = fmt

    def _definition_params(self) -> Dict[str, Any]:
        return {"pattern": self.pattern.pattern, "format": self.format}

    def on_attach(self, internals: Any) -> None:
        patterns = list(internals.bag.get(PATTERNS, ()))
        patterns.append(self.pattern)
        internals.bag[PATTERNS] = patterns

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if value is None:
            return
        if self.pattern.search(value) is None:
            if self.format == "regex":
                payload.add_issue(invalid_format_issue("regex", value, pattern=self.pattern.pattern))
            else:
                payload.add_issue(invalid_format_issue(self.format, value))


class StringPredicateCheck(Check):
    """A named string format decided by a predicate (includes, starts_with, email, ...)."""

    def __init__(
        self,
        fmt: str,
        predicate: Callable[[str], bool],
        params: Optional[CheckParams] = None,
        **properties: Any,
    ) -> None:
        super().__init__(params)
        self.kind = fmt
        self.format = fmt
        self.predicate = predicate
        self.properties = properties

    def _definition_params(self) -> Dict[str, Any]:
        return dict(self.properties)

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if value is None:
            return
        if not self.predicate(value):
            payload.add_issue(invalid_format_issue(self.format, value, **self.properties))


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

class UniqueCheck(Check):
    kind = "unique"

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if value is None:
            return
        seen: List[Any] = []
        duplicates: List[Any] = []
        for item in value:
            if item in seen:
                if item not in duplicates:
                    duplicates.append(item)
            else:
                seen.append(item)
        if duplicates:
            payload.add_issue(custom_issue(None, value, check="unique", duplicates=duplicates))


# ---------------------------------------------------------------------------
# Custom and overwrite
# ---------------------------------------------------------------------------

def call_with_optional_context(fn: Callable[..., Any], value: Any, extra: Any) -> Any:
    """Call ``fn(value, extra)`` when fn takes two positional args, else ``fn(value)``."""
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return fn(value)
    positional = [
        p for p in sig.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    takes_varargs = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in sig.parameters.values())
    if len(positional) >= 2 or takes_varargs:
        return fn(value, extra)
    return fn(value)


def fold_callback_error(payload: ParsePayload, exc: Exception, value: Any) -> None:
    """Turn an exception raised by a user callback into payload issues.

    ZodError issues are folded back in through the raw converter; a plain
    ValueError becomes one custom issue carrying its message.
    """
    if isinstance(exc, ZodError):
        payload.add_issues([issue_to_raw(issue) for issue in exc.issues])
    else:
        payload.add_issue(custom_issue(str(exc) or None, value))


class CustomCheck(Check):
    """User predicate (refine) or payload-level function (check).

    In ``refine`` mode the predicate returns a truthy value to accept.
    In ``check`` mode the function receives the payload and adds its own
    issues, which lets one check emit several issues.
    """

    kind = "custom"

    def __init__(
        self,
        fn: Callable[..., Any],
        params: Optional[CheckParams] = None,
        mode: str = "refine",
        accepts_nil: bool = False,
    ) -> None:
        params = params or CheckParams()
        super().__init__(params)
        self.fn = fn
        self.mode = mode
        self.accepts_nil = accepts_nil
        self.path = list(params.path)
        self.params = dict(params.params)
        self.code = params.code

    def _definition_params(self) -> Dict[str, Any]:
        return {"mode": self.mode, "fn": self.fn}

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if self.mode == "check":
            try:
                self.fn(payload)
            except ValueError as exc:
                fold_callback_error(payload, exc, value)
            return
        try:
            ok = self.fn(value)
        except ValueError as exc:
            fold_callback_error(payload, exc, value)
            return
        if not ok:
            issue = RawIssue(self.code, value, path=list(self.path), properties=dict(self.params))
            payload.add_issue(issue)


class OverwriteCheck(Check):
    """Replace the payload value with ``fn(value)``. Never emits an issue."""

    kind = "overwrite"

    def __init__(self, fn: Callable[[Any], Any], params: Optional[CheckParams] = None) -> None:
        super().__init__(params)
        self.fn = fn

    def _definition_params(self) -> Dict[str, Any]:
        return {"fn": self.fn}

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        if payload.value is None:
            return
        payload.set_value(self.fn(payload.value))


# ---------------------------------------------------------------------------
# Membership (enum / literal)
# ---------------------------------------------------------------------------

def same_value(a: Any, b: Any) -> bool:
    """Equality that keeps bools apart from ints and compares enum members by value."""
    if isinstance(a, Enum):
        a = a.value
    if isinstance(b, Enum):
        b = b.value
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        return False


class OneOfCheck(Check):
    """Value must equal one of a fixed set. Preinstalled by enum and literal schemas."""

    kind = "one_of"

    def __init__(self, values: Sequence[Any], params: Optional[CheckParams] = None) -> None:
        super().__init__(params)
        self.values = tuple(values)
        self.abort = True

    def _definition_params(self) -> Dict[str, Any]:
        return {"values": list(self.values)}

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if not any(same_value(value, allowed) for allowed in self.values):
            payload.add_issue(invalid_value_issue(self.values, value))
