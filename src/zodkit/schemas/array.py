"""Fixed-length arrays (tuples), optionally with a rest element schema."""

from typing import Any, List, Optional, Sequence, Tuple

from zodkit.codes import TypeCode
from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.internals import SchemaInternals
from zodkit.kernel.issues import fixed_length_issue, too_small_issue
from zodkit.schemas.base import ZodType


class ZodArray(ZodType):
    """``array(a, b)`` accepts a list or tuple of exactly two elements.

    An arity mismatch produces one too_small / too_big issue and no
    element is validated. The output keeps the input's sequence type
    (tuple in, tuple out).
    """

    _complex = True

    def __init__(self, internals: SchemaInternals, items: Sequence[ZodType], rest: Optional[ZodType] = None) -> None:
        super().__init__(internals)
        self._items: Tuple[ZodType, ...] = tuple(items)
        self._rest = rest

    @property
    def items(self) -> Tuple[ZodType, ...]:
        return self._items

    def rest(self, schema: ZodType) -> "ZodArray":
        """Allow extra trailing elements, each validated by ``schema``."""
        new = self._clone()
        new._rest = schema
        return new

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, isinstance(value, (list, tuple))

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        arity = len(self._items)
        actual = len(value)
        if self._rest is None and actual != arity:
            self._own_issue(payload, fixed_length_issue(arity, actual, value))
            return
        if actual < arity:
            self._own_issue(payload, too_small_issue(arity, True, "array", value))
            return

        out: List[Any] = []
        for index, element in enumerate(value):
            schema = self._items[index] if index < arity else self._rest
            child = schema._run(element, ctx)
            if child.issues:
                payload.add_issues(child.issues, index)
            else:
                out.append(child.value)
        if not payload.issues:
            payload.value = tuple(out) if isinstance(value, tuple) else out
