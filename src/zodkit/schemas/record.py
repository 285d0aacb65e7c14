"""Records: mappings whose keys and values are each governed by a schema.

With an enum or literal key schema the record is exhaustive: every
allowed key must be present (unless partial) and any other key is
unrecognized. With any other key schema each present key is validated on
its own. Numeric key schemas read numeric strings as numbers and the
output key is the re-stringified result.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

from zodkit.codes import NUMERIC_TYPES, TypeCode
from zodkit.kernel.checks import same_value
from zodkit.kernel.coercion import is_numeric_string
from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.internals import SchemaInternals
from zodkit.kernel.issues import RawIssue, invalid_key_issue, invalid_type_issue, unrecognized_keys_issue
from zodkit.kernel.ref import Ref
from zodkit.schemas.base import ZodType
from zodkit.schemas.slice import SizedMixin

_EXHAUSTIVE_KEY_TYPES = (TypeCode.ENUM, TypeCode.LITERAL)


def _number_from_key(key: str) -> Any:
    text = key.strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def _stringify_key(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ZodRecord(SizedMixin, ZodType):
    _complex = True
    _size_origin = "record"

    def __init__(
        self,
        internals: SchemaInternals,
        key_schema: ZodType,
        value_schema: ZodType,
        partial: bool = False,
        loose: bool = False,
    ) -> None:
        super().__init__(internals)
        self._key = key_schema
        self._value = value_schema
        self._partial = partial
        self._loose = loose

    @property
    def key_schema(self) -> ZodType:
        return self._key

    @property
    def value_schema(self) -> ZodType:
        return self._value

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, isinstance(value, Mapping)

    def _exhaustive_keys(self) -> Optional[Tuple[Any, ...]]:
        internals = self._key._zod
        if internals.type in _EXHAUSTIVE_KEY_TYPES and internals.values:
            return tuple(internals.values)
        return None

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        allowed = self._exhaustive_keys()
        if allowed is not None:
            out = self._validate_exhaustive(payload, ctx, allowed)
        else:
            out = self._validate_pattern(payload, ctx)
        if not payload.issues:
            payload.value = out

    def _validate_exhaustive(self, payload: ParsePayload, ctx: ParseContext, allowed: Tuple[Any, ...]) -> Dict[Any, Any]:
        value = payload.value
        out: Dict[Any, Any] = {}
        for key in allowed:
            if key not in value:
                if not self._partial:
                    missing = invalid_type_issue(self._value._expected, None)
                    missing.path = [key]
                    self._own_issue(payload, missing)
                continue
            child = self._value._run(value[key], ctx)
            if child.issues:
                payload.add_issues(child.issues, key)
                continue
            out[key] = child.value

        unknown = [k for k in value if not any(same_value(k, a) for a in allowed)]
        if unknown:
            if self._loose:
                for key in unknown:
                    out[key] = value[key]
            else:
                self._own_issue(payload, unrecognized_keys_issue(unknown, value))
        return out

    def _validate_pattern(self, payload: ParsePayload, ctx: ParseContext) -> Dict[Any, Any]:
        numeric = self._key._zod.type in NUMERIC_TYPES
        out: Dict[Any, Any] = {}
        for key, item in payload.value.items():
            out_key, key_issues = self._parse_key(key, numeric, ctx)
            if key_issues:
                if self._loose:
                    out[key] = item
                elif numeric:
                    payload.add_issues(key_issues, key)
                else:
                    self._own_issue(payload, invalid_key_issue(key, "record", key_issues, key))
                continue
            child = self._value._run(item, ctx)
            if child.issues:
                payload.add_issues(child.issues, key)
                continue
            out[out_key] = child.value
        return out

    def _parse_key(self, key: Any, numeric: bool, ctx: ParseContext) -> Tuple[Any, List[RawIssue]]:
        candidate = key
        from_string = False
        if numeric and isinstance(key, str) and is_numeric_string(key):
            candidate = _number_from_key(key)
            from_string = True
        child = self._key._run(candidate, ctx)
        if child.issues:
            return key, child.issues
        parsed = child.value.value if isinstance(child.value, Ref) else child.value
        if from_string:
            return _stringify_key(parsed), []
        return parsed, []
