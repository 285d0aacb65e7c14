"""Object schemas: a fixed shape of named fields over a mapping.

Unknown keys are governed by the object's mode:

- ``strict`` (the default): one unrecognized_keys issue listing every unknown key
- ``strip``: unknown keys are dropped from the output
- ``passthrough``: unknown keys are copied to the output unvalidated

A catchall schema overrides the mode and validates every unknown value.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional, Tuple

from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.internals import SchemaInternals
from zodkit.kernel.issues import unrecognized_keys_issue
from zodkit.schemas.base import ZodType
from zodkit.schemas.slice import SizedMixin

STRICT = "strict"
STRIP = "strip"
PASSTHROUGH = "passthrough"


class ZodObject(SizedMixin, ZodType):
    _complex = True
    _size_origin = "object"

    def __init__(
        self,
        internals: SchemaInternals,
        shape: Dict[str, ZodType],
        mode: str = STRICT,
        catchall: Optional[ZodType] = None,
    ) -> None:
        super().__init__(internals)
        self._shape = dict(shape)
        self._mode = mode
        self._catchall = catchall

    @property
    def shape(self) -> Dict[str, ZodType]:
        return dict(self._shape)

    @property
    def mode(self) -> str:
        return self._mode

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, isinstance(value, Mapping)

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        out: Dict[Any, Any] = {}
        for key, schema in self._shape.items():
            present = key in value
            child = schema._run(value[key] if present else None, ctx)
            if child.issues:
                payload.add_issues(child.issues, key)
                continue
            if not present and child.value is None:
                continue
            out[key] = child.value

        unknown = [key for key in value if key not in self._shape]
        if unknown:
            if self._catchall is not None:
                for key in unknown:
                    child = self._catchall._run(value[key], ctx)
                    if child.issues:
                        payload.add_issues(child.issues, key)
                    else:
                        out[key] = child.value
            elif self._mode == STRICT:
                self._own_issue(payload, unrecognized_keys_issue(unknown, value))
            elif self._mode == PASSTHROUGH:
                for key in unknown:
                    out[key] = value[key]

        if not payload.issues:
            payload.value = out

    # -- unknown-key policy -------------------------------------------------

    def _derive(self, **attrs: Any) -> "ZodObject":
        new = self._clone()
        for name, val in attrs.items():
            setattr(new, name, val)
        return new

    def strict(self) -> "ZodObject":
        return self._derive(_mode=STRICT, _catchall=None)

    def strip(self) -> "ZodObject":
        return self._derive(_mode=STRIP, _catchall=None)

    def passthrough(self) -> "ZodObject":
        return self._derive(_mode=PASSTHROUGH, _catchall=None)

    def catchall(self, schema: ZodType) -> "ZodObject":
        return self._derive(_catchall=schema)

    # -- shape helpers ------------------------------------------------------

    def keyof(self) -> ZodType:
        """Enum schema over the declared keys."""
        from zodkit.schemas.enum import build_enum

        return build_enum(list(self._shape))

    def extend(self, shape: Dict[str, ZodType]) -> "ZodObject":
        merged = dict(self._shape)
        merged.update(shape)
        return self._derive(_shape=merged)

    def merge(self, other: "ZodObject") -> "ZodObject":
        """Extend with another object's shape; the other object's mode wins."""
        merged = dict(self._shape)
        merged.update(other._shape)
        return self._derive(_shape=merged, _mode=other._mode, _catchall=other._catchall)

    def pick(self, *keys: str) -> "ZodObject":
        missing = [k for k in keys if k not in self._shape]
        if missing:
            raise KeyError(f"unknown keys: {', '.join(missing)}")
        return self._derive(_shape={k: v for k, v in self._shape.items() if k in keys})

    def omit(self, *keys: str) -> "ZodObject":
        return self._derive(_shape={k: v for k, v in self._shape.items() if k not in keys})

    def partial(self, *keys: str) -> "ZodObject":
        """Make the given fields (all fields when none are named) optional."""
        targets = self._targets(keys)
        return self._derive(_shape={k: (v.optional() if k in targets else v) for k, v in self._shape.items()})

    def required(self, *keys: str) -> "ZodObject":
        """Make the given fields (all fields when none are named) non-optional."""
        targets = self._targets(keys)
        return self._derive(_shape={k: (v.non_optional() if k in targets else v) for k, v in self._shape.items()})

    def _targets(self, keys: Iterable[str]) -> frozenset:
        keys = tuple(keys)
        return frozenset(keys) if keys else frozenset(self._shape)
