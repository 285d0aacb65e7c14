"""Enum and literal schemas.

Both recognize any input and leave membership to a preinstalled OneOfCheck,
so a wrong value reports invalid_value (not invalid_type). The accepted
raw values live in ``internals.values``, which discriminated unions read
to index their options.
"""

from enum import Enum
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple, Type

from zodkit.codes import TypeCode
from zodkit.kernel.checks import OneOfCheck, same_value
from zodkit.kernel.internals import CONSTRUCTION_ERROR, SchemaInternals, normalize_params
from zodkit.schemas.base import ZodType


def _raw(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _membership(type_code: TypeCode, values: Sequence[Any], params: Any) -> SchemaInternals:
    internals = SchemaInternals.from_params(type_code, normalize_params(params), values=tuple(values))
    if not values:
        internals.bag[CONSTRUCTION_ERROR] = f"{type_code.value} requires at least one value"
    internals.add_check(OneOfCheck(values))
    return internals


class ZodEnum(ZodType):
    """One of a fixed set of comparable values."""

    def __init__(self, internals: SchemaInternals, enum_class: Optional[Type[Enum]] = None) -> None:
        super().__init__(internals)
        self._enum_class = enum_class

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        cls = self._enum_class
        if cls is not None and not isinstance(value, cls):
            try:
                return cls(value), True
            except ValueError:
                pass
        return value, True

    @property
    def options(self) -> Tuple[Any, ...]:
        return tuple(self._zod.values or ())

    @property
    def enum(self) -> Dict[str, Any]:
        """Name -> value view of the options."""
        if self._enum_class is not None:
            return {member.name: member.value for member in self._enum_class}
        return {str(v): v for v in self.options}

    def extract(self, values: Iterable[Any], params: Any = None) -> "ZodEnum":
        """Narrow to a subset of the current options."""
        wanted = list(values)
        kept = [v for v in self.options if any(same_value(v, w) for w in wanted)]
        return ZodEnum(_membership(TypeCode.ENUM, kept, params), self._enum_class)

    def exclude(self, values: Iterable[Any], params: Any = None) -> "ZodEnum":
        unwanted = list(values)
        kept = [v for v in self.options if not any(same_value(v, u) for u in unwanted)]
        return ZodEnum(_membership(TypeCode.ENUM, kept, params), self._enum_class)


class ZodLiteral(ZodType):
    """Exactly one of the given values (usually a single one)."""

    @property
    def values(self) -> Tuple[Any, ...]:
        return tuple(self._zod.values or ())

    @property
    def value(self) -> Any:
        """The literal value; the first one when several are allowed."""
        return self.values[0] if self.values else None


def build_enum(values: Sequence[Any], params: Any = None) -> ZodEnum:
    return ZodEnum(_membership(TypeCode.ENUM, list(values), params))


def build_native_enum(enum_class: Type[Enum], params: Any = None) -> ZodEnum:
    values = [member.value for member in enum_class]
    return ZodEnum(_membership(TypeCode.ENUM, values, params), enum_class)


def build_literal(values: Sequence[Any], params: Any = None) -> ZodLiteral:
    return ZodLiteral(_membership(TypeCode.LITERAL, [_raw(v) for v in values], params))
