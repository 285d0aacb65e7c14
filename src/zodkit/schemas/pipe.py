"""Pipes and transforms.

``a.pipe(b)`` feeds a's validated output into b. ``a.transform(fn)`` is
``a.pipe(ZodTransform(fn))``. ``preprocess(fn, schema)`` runs fn before
the schema sees the input.
"""

from typing import Any, Callable, Tuple

from zodkit.codes import TypeCode
from zodkit.kernel.checks import call_with_optional_context, fold_callback_error
from zodkit.kernel.context import ParseContext, ParsePayload, RefinementContext
from zodkit.kernel.internals import SchemaInternals
from zodkit.schemas.base import ZodType


class ZodPipe(ZodType):
    _accepts_nil = True
    _complex = True

    def __init__(self, in_schema: ZodType, out_schema: ZodType) -> None:
        super().__init__(SchemaInternals(TypeCode.PIPE))
        self._in = in_schema
        self._out = out_schema

    @property
    def in_(self) -> ZodType:
        return self._in

    @property
    def out(self) -> ZodType:
        return self._out

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        left = self._in._run(payload.value, ctx)
        if left.issues:
            payload.add_issues(left.issues)
            return
        right = self._out._run(left.value, ctx)
        if right.issues:
            payload.add_issues(right.issues)
            return
        payload.value = right.value


class ZodTransform(ZodType):
    """Calls ``fn(value)`` or ``fn(value, ctx)``; ctx can add issues or abort."""

    _accepts_nil = True
    _complex = True

    def __init__(self, fn: Callable[..., Any]) -> None:
        super().__init__(SchemaInternals(TypeCode.TRANSFORM))
        self._fn = fn

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        refinement = RefinementContext(payload, ctx)
        value = payload.value
        try:
            result = call_with_optional_context(self._fn, value, refinement)
        except ValueError as exc:
            fold_callback_error(payload, exc, value)
            return
        if refinement.aborted or payload.issues:
            return
        payload.value = result


def preprocess(fn: Callable[..., Any], schema: ZodType) -> ZodPipe:
    """Run ``fn`` on the raw input, then validate the result with ``schema``."""
    return ZodPipe(ZodTransform(fn), schema)
