"""Schema classes, one module per family.

Construct schemas through the factories in ``zodkit.api``; these classes
are exported for isinstance checks and type annotations.
"""

from .base import ParseResult, ZodType
from .string import ZodString
from .numeric import ZodBigInt, ZodComplex, ZodFloat, ZodInt, ZodNumber
from .boolean import ZodBool, ZodStringBool
from .time import ZodTime
from .enum import ZodEnum, ZodLiteral
from .special import ZodAny, ZodCustom, ZodNever, ZodNil, ZodUnknown
from .array import ZodArray
from .slice import ZodSlice
from .set import ZodSet
from .object import ZodObject
from .record import ZodRecord
from .map import ZodMap
from .union import ZodDiscriminatedUnion, ZodUnion, ZodXor
from .intersection import ZodIntersection
from .pipe import ZodPipe, ZodTransform
from .lazy import ZodLazy

__all__ = [
    "ParseResult",
    "ZodType",
    "ZodString",
    "ZodNumber",
    "ZodInt",
    "ZodBigInt",
    "ZodFloat",
    "ZodComplex",
    "ZodBool",
    "ZodStringBool",
    "ZodTime",
    "ZodEnum",
    "ZodLiteral",
    "ZodNil",
    "ZodAny",
    "ZodUnknown",
    "ZodNever",
    "ZodCustom",
    "ZodArray",
    "ZodSlice",
    "ZodSet",
    "ZodObject",
    "ZodRecord",
    "ZodMap",
    "ZodUnion",
    "ZodDiscriminatedUnion",
    "ZodXor",
    "ZodIntersection",
    "ZodPipe",
    "ZodTransform",
    "ZodLazy",
]
