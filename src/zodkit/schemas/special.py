"""Special leaves: nil, any, unknown, never and custom."""

from typing import Any, Tuple

from zodkit.schemas.base import ZodType


class ZodNil(ZodType):
    """Only ``None`` is valid."""

    _accepts_nil = True

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return None, value is None


class ZodAny(ZodType):
    _accepts_nil = True


class ZodUnknown(ZodType):
    _accepts_nil = True


class ZodNever(ZodType):
    """Nothing is valid."""

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, False


class ZodCustom(ZodType):
    """Any value passing a user predicate; the predicate is a preinstalled refine check."""

    _accepts_nil = True
