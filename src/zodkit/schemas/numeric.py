"""Numeric schemas: the integer family, floats, big integers and complex numbers.

Integer widths are enforced by range checks the factories preinstall, so
``int8()`` rejects 200 with an ordinary too_big issue. ``bigint()`` is a
plain unbounded Python ``int``.
"""

import math
from typing import Any, Dict, Tuple

from zodkit.codes import TypeCode
from zodkit.kernel.checks import (
    FiniteCheck,
    IntegerCheck,
    MultipleOfCheck,
    RangeCheck,
    SafeCheck,
    normalize_check_params,
)
from zodkit.kernel.coercion import to_complex, to_float, to_integer
from zodkit.kernel.internals import SchemaInternals
from zodkit.schemas.base import ZodType

FLOAT32_MAX = 3.4028234663852886e38

INTEGER_BOUNDS: Dict[TypeCode, Tuple[int, int]] = {
    TypeCode.INT: (-(2 ** 63), 2 ** 63 - 1),
    TypeCode.INT64: (-(2 ** 63), 2 ** 63 - 1),
    TypeCode.INT32: (-(2 ** 31), 2 ** 31 - 1),
    TypeCode.INT16: (-(2 ** 15), 2 ** 15 - 1),
    TypeCode.INT8: (-(2 ** 7), 2 ** 7 - 1),
    TypeCode.UINT: (0, 2 ** 64 - 1),
    TypeCode.UINT64: (0, 2 ** 64 - 1),
    TypeCode.UINT32: (0, 2 ** 32 - 1),
    TypeCode.UINT16: (0, 2 ** 16 - 1),
    TypeCode.UINT8: (0, 2 ** 8 - 1),
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ZodNumber(ZodType):
    """Shared range and arithmetic checks for ints and floats."""

    _origin = "number"

    def _range(self, kind: str, bound: Any, params: Any, kwargs: Dict[str, Any]) -> Any:
        check = RangeCheck(kind, bound, self._origin, normalize_check_params(params, **kwargs))
        return self._with_check(check)

    def gt(self, value: Any, params: Any = None, **kwargs: Any) -> Any:
        return self._range("gt", value, params, kwargs)

    def gte(self, value: Any, params: Any = None, **kwargs: Any) -> Any:
        return self._range("gte", value, params, kwargs)

    def min(self, value: Any, params: Any = None, **kwargs: Any) -> Any:
        return self._range("gte", value, params, kwargs)

    def lt(self, value: Any, params: Any = None, **kwargs: Any) -> Any:
        return self._range("lt", value, params, kwargs)

    def lte(self, value: Any, params: Any = None, **kwargs: Any) -> Any:
        return self._range("lte", value, params, kwargs)

    def max(self, value: Any, params: Any = None, **kwargs: Any) -> Any:
        return self._range("lte", value, params, kwargs)

    def positive(self, params: Any = None, **kwargs: Any) -> Any:
        return self._range("gt", 0, params, kwargs)

    def negative(self, params: Any = None, **kwargs: Any) -> Any:
        return self._range("lt", 0, params, kwargs)

    def non_negative(self, params: Any = None, **kwargs: Any) -> Any:
        return self._range("gte", 0, params, kwargs)

    def non_positive(self, params: Any = None, **kwargs: Any) -> Any:
        return self._range("lte", 0, params, kwargs)

    def multiple_of(self, divisor: Any, params: Any = None, **kwargs: Any) -> Any:
        check = MultipleOfCheck(divisor, self._origin, normalize_check_params(params, **kwargs))
        return self._with_check(check)

    def step(self, divisor: Any, params: Any = None, **kwargs: Any) -> Any:
        return self.multiple_of(divisor, params, **kwargs)

    def safe(self, params: Any = None, **kwargs: Any) -> Any:
        return self._with_check(SafeCheck(self._origin, normalize_check_params(params, **kwargs)))

    @property
    def min_value(self) -> Any:
        return self._zod.bag.get("minimum")

    @property
    def max_value(self) -> Any:
        return self._zod.bag.get("maximum")


class ZodInt(ZodNumber):
    """Any integer width. Bools are not integers here; floats need coerce."""

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, _is_int(value)

    def _coerce(self, value: Any) -> Any:
        return to_integer(value)


class ZodBigInt(ZodInt):
    _origin = "bigint"


class ZodFloat(ZodNumber):
    """float32 / float64. Ints are accepted and widened; NaN is refused."""

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        if isinstance(value, float):
            return value, not math.isnan(value)
        if _is_int(value):
            try:
                return float(value), True
            except OverflowError:
                return value, False
        return value, False

    def _coerce(self, value: Any) -> Any:
        return to_float(value)

    def integer(self, params: Any = None, **kwargs: Any) -> "ZodFloat":
        return self._with_check(IntegerCheck(normalize_check_params(params, **kwargs)))

    def finite(self, params: Any = None, **kwargs: Any) -> "ZodFloat":
        return self._with_check(FiniteCheck(normalize_check_params(params, **kwargs)))


class ZodComplex(ZodType):
    """complex64 / complex128. Real numbers are promoted."""

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        if isinstance(value, complex):
            return value, True
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return complex(value), True
        return value, False

    def _coerce(self, value: Any) -> Any:
        return to_complex(value)


def install_width_bounds(internals: SchemaInternals) -> SchemaInternals:
    """Preinstall the min/max checks implied by an integer or float32 width."""
    if internals.type in INTEGER_BOUNDS:
        low, high = INTEGER_BOUNDS[internals.type]
        internals.add_check(RangeCheck("gte", low, "number"))
        internals.add_check(RangeCheck("lte", high, "number"))
    elif internals.type is TypeCode.FLOAT32:
        internals.add_check(RangeCheck("gte", -FLOAT32_MAX, "number"))
        internals.add_check(RangeCheck("lte", FLOAT32_MAX, "number"))
    return internals
