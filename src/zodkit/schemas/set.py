"""Sets of distinct, hashable elements."""

from typing import Any, List, Tuple

from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.internals import SchemaInternals
from zodkit.schemas.base import ZodType
from zodkit.schemas.slice import SizedMixin


class ZodSet(SizedMixin, ZodType):
    """Every element validated by one schema.

    Sets and frozensets are taken as they are. Lists and tuples are read
    as sets, so duplicates collapse before sizing. A frozenset comes out
    as a frozenset, anything else as a set. Element issues are reported
    under the element itself.
    """

    _complex = True
    _size_origin = "set"

    def __init__(self, internals: SchemaInternals, element: ZodType) -> None:
        super().__init__(internals)
        self._element = element

    @property
    def element(self) -> ZodType:
        return self._element

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        if isinstance(value, (set, frozenset)):
            return value, True
        if isinstance(value, (list, tuple)):
            try:
                return set(value), True
            except TypeError:
                return value, False
        return value, False

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        out: List[Any] = []
        for element in payload.value:
            child = self._element._run(element, ctx)
            if child.issues:
                payload.add_issues(child.issues, element)
            else:
                out.append(child.value)
        if not payload.issues:
            payload.value = frozenset(out) if isinstance(payload.value, frozenset) else set(out)
