"""Lazy schemas for recursive structures."""

from typing import Any, Callable, Optional

from zodkit.codes import TypeCode
from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.internals import SchemaInternals
from zodkit.schemas.base import ZodType


class ZodLazy(ZodType):
    """Defers building the inner schema until the first parse.

    The getter runs once; later parses reuse its result.
    """

    _accepts_nil = True
    _complex = True

    def __init__(self, getter: Callable[[], ZodType]) -> None:
        super().__init__(SchemaInternals(TypeCode.LAZY))
        self._getter = getter
        self._cached: Optional[ZodType] = None

    @property
    def schema(self) -> ZodType:
        if self._cached is None:
            self._cached = self._getter()
        return self._cached

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        child = self.schema._run(payload.value, ctx)
        if child.issues:
            payload.add_issues(child.issues)
            return
        payload.value = child.value
