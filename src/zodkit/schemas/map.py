"""Maps with schema-validated keys and values."""

from collections.abc import Mapping
from typing import Any, Dict, Tuple

from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.internals import SchemaInternals
from zodkit.kernel.issues import invalid_key_issue
from zodkit.schemas.base import ZodType
from zodkit.schemas.slice import SizedMixin


class ZodMap(SizedMixin, ZodType):
    """A failing key yields one invalid_key issue; failing values are reported under their key."""

    _complex = True
    _size_origin = "map"

    def __init__(self, internals: SchemaInternals, key_schema: ZodType, value_schema: ZodType) -> None:
        super().__init__(internals)
        self._key = key_schema
        self._value = value_schema

    @property
    def key_schema(self) -> ZodType:
        return self._key

    @property
    def value_schema(self) -> ZodType:
        return self._value

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, isinstance(value, Mapping)

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        out: Dict[Any, Any] = {}
        for key, item in payload.value.items():
            key_result = self._key._run(key, ctx)
            if key_result.issues:
                self._own_issue(payload, invalid_key_issue(key, "map", key_result.issues, key))
                continue
            child = self._value._run(item, ctx)
            if child.issues:
                payload.add_issues(child.issues, key)
                continue
            out[key_result.value] = child.value
        if not payload.issues:
            payload.value = out
