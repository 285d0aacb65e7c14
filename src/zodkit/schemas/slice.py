"""Homogeneous sequences."""

from typing import Any, List, Tuple

from zodkit.kernel.checks import ExactSize, MaxSize, MinSize, UniqueCheck, normalize_check_params
from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.internals import SchemaInternals
from zodkit.schemas.base import ZodType


class SizedMixin:
    """min / max / length / non_empty for containers measured with ``len``."""

    _size_origin = "slice"

    def min(self, minimum: int, params: Any = None, **kwargs: Any) -> Any:
        return self._with_check(MinSize(minimum, self._size_origin, normalize_check_params(params, **kwargs)))

    def max(self, maximum: int, params: Any = None, **kwargs: Any) -> Any:
        return self._with_check(MaxSize(maximum, self._size_origin, normalize_check_params(params, **kwargs)))

    def length(self, size: int, params: Any = None, **kwargs: Any) -> Any:
        return self._with_check(ExactSize(size, self._size_origin, normalize_check_params(params, **kwargs)))

    def size(self, size: int, params: Any = None, **kwargs: Any) -> Any:
        return self.length(size, params, **kwargs)

    def non_empty(self, params: Any = None, **kwargs: Any) -> Any:
        return self.min(1, params, **kwargs)


class ZodSlice(SizedMixin, ZodType):
    """Every element validated by one schema. Lists and tuples are accepted; a list comes out."""

    _complex = True

    def __init__(self, internals: SchemaInternals, element: ZodType) -> None:
        super().__init__(internals)
        self._element = element

    @property
    def element(self) -> ZodType:
        return self._element

    def unique(self, params: Any = None, **kwargs: Any) -> "ZodSlice":
        return self._with_check(UniqueCheck(normalize_check_params(params, **kwargs)))

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, isinstance(value, (list, tuple))

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        out: List[Any] = []
        for index, element in enumerate(payload.value):
            child = self._element._run(element, ctx)
            if child.issues:
                payload.add_issues(child.issues, index)
            else:
                out.append(child.value)
        if not payload.issues:
            payload.value = out
