"""Public factories: one function per schema kind.

Every factory accepts ``params`` (a message string, a mapping or a
SchemaParams) plus keyword options; unknown options are ignored. The
``*_ptr`` variants return schemas whose output is a ``Ref`` box.
"""

from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence, Type, TypeVar

from zodkit.codes import TypeCode
from zodkit.kernel.checks import CustomCheck, normalize_check_params
from zodkit.kernel.internals import Constraint, SchemaInternals, normalize_params
from zodkit.schemas.array import ZodArray
from zodkit.schemas.base import ZodType
from zodkit.schemas.boolean import (
    DEFAULT_FALSY,
    DEFAULT_TRUTHY,
    INSENSITIVE,
    StringBoolCheck,
    ZodBool,
    ZodStringBool,
)
from zodkit.schemas.enum import ZodEnum, ZodLiteral, build_enum, build_literal, build_native_enum
from zodkit.schemas.intersection import ZodIntersection, build_intersection
from zodkit.schemas.lazy import ZodLazy
from zodkit.schemas.map import ZodMap
from zodkit.schemas.numeric import ZodBigInt, ZodComplex, ZodFloat, ZodInt, install_width_bounds
from zodkit.schemas.object import PASSTHROUGH, STRICT, STRIP, ZodObject
from zodkit.schemas.pipe import ZodPipe
from zodkit.schemas.pipe import preprocess as _preprocess
from zodkit.schemas.record import ZodRecord
from zodkit.schemas.set import ZodSet
from zodkit.schemas.slice import ZodSlice
from zodkit.schemas.special import ZodAny, ZodCustom, ZodNever, ZodNil, ZodUnknown
from zodkit.schemas.string import ZodString
from zodkit.schemas.time import ZodTime
from zodkit.schemas.union import (
    ZodDiscriminatedUnion,
    ZodUnion,
    ZodXor,
    build_discriminated_union,
    build_union,
    build_xor,
)

S = TypeVar("S", bound=ZodType)


def _internals(type_code: TypeCode, params: Any, kwargs: Dict[str, Any], ref: bool = False) -> SchemaInternals:
    internals = SchemaInternals.from_params(type_code, normalize_params(params, **kwargs))
    if ref:
        internals.constraint = Constraint.REF
    return internals


def _variadic(items: Sequence[Any]) -> list:
    # Accept both f(a, b) and f([a, b]).
    if len(items) == 1 and isinstance(items[0], (list, tuple)):
        return list(items[0])
    return list(items)


# ---------------------------------------------------------------------------
# Strings, booleans, time
# ---------------------------------------------------------------------------

def string(params: Any = None, **kwargs: Any) -> ZodString:
    return ZodString(_internals(TypeCode.STRING, params, kwargs))


def string_ptr(params: Any = None, **kwargs: Any) -> ZodString:
    return ZodString(_internals(TypeCode.STRING, params, kwargs, ref=True))


def bool_(params: Any = None, **kwargs: Any) -> ZodBool:
    return ZodBool(_internals(TypeCode.BOOL, params, kwargs))


def bool_ptr(params: Any = None, **kwargs: Any) -> ZodBool:
    return ZodBool(_internals(TypeCode.BOOL, params, kwargs, ref=True))


def stringbool(
    params: Any = None,
    *,
    truthy: Optional[Sequence[str]] = None,
    falsy: Optional[Sequence[str]] = None,
    case: str = INSENSITIVE,
    **kwargs: Any,
) -> ZodStringBool:
    """Booleans spelled as strings: ``"yes"``/``"no"``, ``"on"``/``"off"`` and so on.

    ``truthy`` and ``falsy`` replace the default spellings; ``case`` is
    ``"insensitive"`` (the default) or ``"sensitive"``.
    """
    internals = _internals(TypeCode.STRINGBOOL, params, kwargs)
    internals.add_check(StringBoolCheck(truthy or DEFAULT_TRUTHY, falsy or DEFAULT_FALSY, case))
    return ZodStringBool(internals)


def time(params: Any = None, **kwargs: Any) -> ZodTime:
    return ZodTime(_internals(TypeCode.TIME, params, kwargs))


def time_ptr(params: Any = None, **kwargs: Any) -> ZodTime:
    return ZodTime(_internals(TypeCode.TIME, params, kwargs, ref=True))


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

def _int(type_code: TypeCode, params: Any, kwargs: Dict[str, Any], ref: bool = False) -> ZodInt:
    return ZodInt(install_width_bounds(_internals(type_code, params, kwargs, ref)))


def int_(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.INT, params, kwargs)


def int_ptr(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.INT, params, kwargs, ref=True)


def int8(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.INT8, params, kwargs)


def int8_ptr(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.INT8, params, kwargs, ref=True)


def int16(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.INT16, params, kwargs)


def int16_ptr(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.INT16, params, kwargs, ref=True)


def int32(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.INT32, params, kwargs)


def int32_ptr(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.INT32, params, kwargs, ref=True)


def int64(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.INT64, params, kwargs)


def int64_ptr(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.INT64, params, kwargs, ref=True)


def uint(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.UINT, params, kwargs)


def uint_ptr(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.UINT, params, kwargs, ref=True)


def uint8(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.UINT8, params, kwargs)


def uint8_ptr(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.UINT8, params, kwargs, ref=True)


def uint16(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.UINT16, params, kwargs)


def uint16_ptr(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.UINT16, params, kwargs, ref=True)


def uint32(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.UINT32, params, kwargs)


def uint32_ptr(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.UINT32, params, kwargs, ref=True)


def uint64(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.UINT64, params, kwargs)


def uint64_ptr(params: Any = None, **kwargs: Any) -> ZodInt:
    return _int(TypeCode.UINT64, params, kwargs, ref=True)


def bigint(params: Any = None, **kwargs: Any) -> ZodBigInt:
    return ZodBigInt(_internals(TypeCode.BIGINT, params, kwargs))


def bigint_ptr(params: Any = None, **kwargs: Any) -> ZodBigInt:
    return ZodBigInt(_internals(TypeCode.BIGINT, params, kwargs, ref=True))


def float32(params: Any = None, **kwargs: Any) -> ZodFloat:
    return ZodFloat(install_width_bounds(_internals(TypeCode.FLOAT32, params, kwargs)))


def float32_ptr(params: Any = None, **kwargs: Any) -> ZodFloat:
    return ZodFloat(install_width_bounds(_internals(TypeCode.FLOAT32, params, kwargs, ref=True)))


def float64(params: Any = None, **kwargs: Any) -> ZodFloat:
    return ZodFloat(_internals(TypeCode.FLOAT64, params, kwargs))


def float64_ptr(params: Any = None, **kwargs: Any) -> ZodFloat:
    return ZodFloat(_internals(TypeCode.FLOAT64, params, kwargs, ref=True))


number = float64
number_ptr = float64_ptr


def complex64(params: Any = None, **kwargs: Any) -> ZodComplex:
    return ZodComplex(_internals(TypeCode.COMPLEX64, params, kwargs))


def complex64_ptr(params: Any = None, **kwargs: Any) -> ZodComplex:
    return ZodComplex(_internals(TypeCode.COMPLEX64, params, kwargs, ref=True))


def complex128(params: Any = None, **kwargs: Any) -> ZodComplex:
    return ZodComplex(_internals(TypeCode.COMPLEX128, params, kwargs))


def complex128_ptr(params: Any = None, **kwargs: Any) -> ZodComplex:
    return ZodComplex(_internals(TypeCode.COMPLEX128, params, kwargs, ref=True))


complex_ = complex128


# ---------------------------------------------------------------------------
# Enums, literals, special leaves
# ---------------------------------------------------------------------------

def enum(*values: Any, params: Any = None) -> ZodEnum:
    """``enum("a", "b")`` or ``enum(["a", "b"])``."""
    return build_enum(_variadic(values), params)


def native_enum(enum_class: Type[Enum], params: Any = None) -> ZodEnum:
    """Accept members of ``enum_class`` or their values; members come out."""
    return build_native_enum(enum_class, params)


def literal(*values: Any, params: Any = None) -> ZodLiteral:
    return build_literal(_variadic(values), params)


def nil(params: Any = None, **kwargs: Any) -> ZodNil:
    return ZodNil(_internals(TypeCode.NIL, params, kwargs))


def any_(params: Any = None, **kwargs: Any) -> ZodAny:
    return ZodAny(_internals(TypeCode.ANY, params, kwargs))


def unknown(params: Any = None, **kwargs: Any) -> ZodUnknown:
    return ZodUnknown(_internals(TypeCode.UNKNOWN, params, kwargs))


def never(params: Any = None, **kwargs: Any) -> ZodNever:
    return ZodNever(_internals(TypeCode.NEVER, params, kwargs))


def custom(fn: Optional[Callable[[Any], Any]] = None, params: Any = None, **kwargs: Any) -> ZodCustom:
    """Any value for which ``fn`` returns truthy; every value when ``fn`` is omitted."""
    internals = _internals(TypeCode.CUSTOM, None, {})
    if fn is not None:
        internals.add_check(CustomCheck(fn, normalize_check_params(params, **kwargs), accepts_nil=True))
    return ZodCustom(internals)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

def _as_ref(schema: S) -> S:
    return schema._clone(constraint=Constraint.REF)


def array(*items: ZodType, params: Any = None) -> ZodArray:
    """Fixed-length array: ``array(string(), int_())`` accepts ``["a", 1]``."""
    return ZodArray(_internals(TypeCode.ARRAY, params, {}), _variadic(items))


def array_ptr(*items: ZodType, params: Any = None) -> ZodArray:
    return ZodArray(_internals(TypeCode.ARRAY, params, {}, ref=True), _variadic(items))


tuple_ = array
tuple_ptr = array_ptr


def slice_(element: ZodType, params: Any = None, **kwargs: Any) -> ZodSlice:
    return ZodSlice(_internals(TypeCode.SLICE, params, kwargs), element)


def slice_ptr(element: ZodType, params: Any = None, **kwargs: Any) -> ZodSlice:
    return ZodSlice(_internals(TypeCode.SLICE, params, kwargs, ref=True), element)


def set_(element: ZodType, params: Any = None, **kwargs: Any) -> ZodSet:
    """Set of distinct elements; lists and tuples are read as sets."""
    return ZodSet(_internals(TypeCode.SET, params, kwargs), element)


def set_ptr(element: ZodType, params: Any = None, **kwargs: Any) -> ZodSet:
    return ZodSet(_internals(TypeCode.SET, params, kwargs, ref=True), element)


def object_(shape: Dict[str, ZodType], params: Any = None, **kwargs: Any) -> ZodObject:
    """Object with unknown keys rejected (see ``ZodObject.strip`` / ``passthrough``)."""
    return ZodObject(_internals(TypeCode.OBJECT, params, kwargs), shape, STRICT)


def object_ptr(shape: Dict[str, ZodType], params: Any = None, **kwargs: Any) -> ZodObject:
    return ZodObject(_internals(TypeCode.OBJECT, params, kwargs, ref=True), shape, STRICT)


def strict_object(shape: Dict[str, ZodType], params: Any = None, **kwargs: Any) -> ZodObject:
    return ZodObject(_internals(TypeCode.OBJECT, params, kwargs), shape, STRICT)


def strict_object_ptr(shape: Dict[str, ZodType], params: Any = None, **kwargs: Any) -> ZodObject:
    return ZodObject(_internals(TypeCode.OBJECT, params, kwargs, ref=True), shape, STRICT)


def strip_object(shape: Dict[str, ZodType], params: Any = None, **kwargs: Any) -> ZodObject:
    return ZodObject(_internals(TypeCode.OBJECT, params, kwargs), shape, STRIP)


def strip_object_ptr(shape: Dict[str, ZodType], params: Any = None, **kwargs: Any) -> ZodObject:
    return ZodObject(_internals(TypeCode.OBJECT, params, kwargs, ref=True), shape, STRIP)


def loose_object(shape: Dict[str, ZodType], params: Any = None, **kwargs: Any) -> ZodObject:
    return ZodObject(_internals(TypeCode.OBJECT, params, kwargs), shape, PASSTHROUGH)


def loose_object_ptr(shape: Dict[str, ZodType], params: Any = None, **kwargs: Any) -> ZodObject:
    return ZodObject(_internals(TypeCode.OBJECT, params, kwargs, ref=True), shape, PASSTHROUGH)


def _record(
    key_schema: ZodType,
    value_schema: Any,
    params: Any,
    kwargs: Dict[str, Any],
    ref: bool = False,
    **flags: bool,
) -> ZodRecord:
    if value_schema is None:
        key_schema, value_schema = string(), key_schema
    return ZodRecord(_internals(TypeCode.RECORD, params, kwargs, ref), key_schema, value_schema, **flags)


def record(key_schema: ZodType, value_schema: Optional[ZodType] = None, params: Any = None, **kwargs: Any) -> ZodRecord:
    """``record(keys, values)``; ``record(values)`` uses string keys."""
    return _record(key_schema, value_schema, params, kwargs)


def record_ptr(key_schema: ZodType, value_schema: Optional[ZodType] = None, params: Any = None, **kwargs: Any) -> ZodRecord:
    return _record(key_schema, value_schema, params, kwargs, ref=True)


def partial_record(key_schema: ZodType, value_schema: Optional[ZodType] = None, params: Any = None, **kwargs: Any) -> ZodRecord:
    """Exhaustive key schemas no longer require every key."""
    return _record(key_schema, value_schema, params, kwargs, partial=True)


def partial_record_ptr(key_schema: ZodType, value_schema: Optional[ZodType] = None, params: Any = None, **kwargs: Any) -> ZodRecord:
    return _record(key_schema, value_schema, params, kwargs, ref=True, partial=True)


def loose_record(key_schema: ZodType, value_schema: Optional[ZodType] = None, params: Any = None, **kwargs: Any) -> ZodRecord:
    """Keys failing the key schema pass through untouched instead of failing."""
    return _record(key_schema, value_schema, params, kwargs, loose=True)


def loose_record_ptr(key_schema: ZodType, value_schema: Optional[ZodType] = None, params: Any = None, **kwargs: Any) -> ZodRecord:
    return _record(key_schema, value_schema, params, kwargs, ref=True, loose=True)


def map_(key_schema: ZodType, value_schema: ZodType, params: Any = None, **kwargs: Any) -> ZodMap:
    return ZodMap(_internals(TypeCode.MAP, params, kwargs), key_schema, value_schema)


def map_ptr(key_schema: ZodType, value_schema: ZodType, params: Any = None, **kwargs: Any) -> ZodMap:
    return ZodMap(_internals(TypeCode.MAP, params, kwargs, ref=True), key_schema, value_schema)


def union(*options: ZodType, params: Any = None) -> ZodUnion:
    return build_union(_variadic(options), params)


def xor(*options: ZodType, params: Any = None) -> ZodXor:
    """Exclusive union: exactly one option may accept the input."""
    return build_xor(_variadic(options), params)


def xor_ptr(*options: ZodType, params: Any = None) -> ZodXor:
    return _as_ref(build_xor(_variadic(options), params))


def discriminated_union(discriminator: str, *options: ZodType, params: Any = None) -> ZodDiscriminatedUnion:
    return build_discriminated_union(discriminator, _variadic(options), params)


def discriminated_union_ptr(discriminator: str, *options: ZodType, params: Any = None) -> ZodDiscriminatedUnion:
    return _as_ref(build_discriminated_union(discriminator, _variadic(options), params))


def intersection(left: ZodType, right: ZodType, params: Any = None) -> ZodIntersection:
    return build_intersection(left, right, params)


def lazy(getter: Callable[[], ZodType]) -> ZodLazy:
    return ZodLazy(getter)


def lazy_ptr(getter: Callable[[], ZodType]) -> ZodLazy:
    return _as_ref(ZodLazy(getter))


def preprocess(fn: Callable[..., Any], schema: ZodType) -> ZodPipe:
    return _preprocess(fn, schema)
