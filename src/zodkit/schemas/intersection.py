"""Intersections: both sides must accept the input; their outputs are merged."""

from collections.abc import Mapping
from typing import Any, List, Tuple

from zodkit.codes import TypeCode
from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.internals import SchemaInternals, normalize_params
from zodkit.kernel.issues import custom_issue
from zodkit.kernel.ref import Ref
from zodkit.schemas.base import ZodType


class MergeConflict(Exception):
    def __init__(self, path: List[Any]) -> None:
        super().__init__(path)
        self.path = path


def merge_values(left: Any, right: Any) -> Any:
    """Deep-merge two parse results.

    Equal values merge to themselves; mappings merge key by key; sequences
    of equal length merge element-wise. Anything else is a conflict.

    Raises:
        MergeConflict: With the path of the first incompatible pair.
    """
    if isinstance(left, Ref):
        left = left.value
    if isinstance(right, Ref):
        right = right.value
    if left is right:
        return left
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        merged = dict(left)
        for key, value in right.items():
            if key in merged:
                try:
                    merged[key] = merge_values(merged[key], value)
                except MergeConflict as exc:
                    raise MergeConflict([key] + exc.path) from None
            else:
                merged[key] = value
        return merged
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if len(left) != len(right):
            raise MergeConflict([])
        items = []
        for index, (a, b) in enumerate(zip(left, right)):
            try:
                items.append(merge_values(a, b))
            except MergeConflict as exc:
                raise MergeConflict([index] + exc.path) from None
        return tuple(items) if isinstance(left, tuple) else items
    if type(left) is type(right) and left == right:
        return left
    raise MergeConflict([])


class ZodIntersection(ZodType):
    _accepts_nil = True
    _complex = True

    def __init__(self, internals: SchemaInternals, left: ZodType, right: ZodType) -> None:
        super().__init__(internals)
        self._left = left
        self._right = right

    @property
    def sides(self) -> Tuple[ZodType, ZodType]:
        return self._left, self._right

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        left = self._left._run(payload.value, ctx)
        right = self._right._run(payload.value, ctx)
        if left.issues or right.issues:
            payload.add_issues(left.issues)
            payload.add_issues(right.issues)
            return
        try:
            payload.value = merge_values(left.value, right.value)
        except MergeConflict as exc:
            where = ".".join(str(atom) for atom in exc.path) or "<root>"
            message = f"Cannot merge intersection results at {where}: incompatible types"
            self._own_issue(payload, custom_issue(message, payload.value, merge_path=exc.path))


def build_intersection(left: ZodType, right: ZodType, params: Any = None) -> ZodIntersection:
    internals = SchemaInternals.from_params(TypeCode.INTERSECTION, normalize_params(params))
    return ZodIntersection(internals, left, right)
