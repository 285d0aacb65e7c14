"""Issue and type code constants for zodkit.

These constants prevent stringly-typed codes and give error maps,
formatters and client code one stable vocabulary to dispatch on.
"""

from enum import Enum


class IssueCode(str, Enum):
    """Stable identifiers for every kind of validation issue."""

    INVALID_TYPE = "invalid_type"
    INVALID_VALUE = "invalid_value"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    NOT_MULTIPLE_OF = "not_multiple_of"
    INVALID_FORMAT = "invalid_format"
    UNRECOGNIZED_KEYS = "unrecognized_keys"
    INVALID_UNION = "invalid_union"
    INVALID_KEY = "invalid_key"
    INVALID_ELEMENT = "invalid_element"
    CUSTOM = "custom"
    NON_OPTIONAL_ABSENT = "non_optional_absent"
    CONSTRUCTION_FAILED = "construction_failed"


class TypeCode(str, Enum):
    """Schema kind tags, used in "expected X" messages and for dispatch."""

    # Leaves
    STRING = "string"
    BOOL = "bool"
    STRINGBOOL = "stringbool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BIGINT = "bigint"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    TIME = "time"
    ENUM = "enum"
    LITERAL = "literal"
    NIL = "nil"
    ANY = "any"
    UNKNOWN = "unknown"
    NEVER = "never"
    CUSTOM = "custom"

    # Containers
    ARRAY = "array"
    SLICE = "slice"
    SET = "set"
    OBJECT = "object"
    RECORD = "record"
    MAP = "map"
    UNION = "union"
    DISCRIMINATED_UNION = "discriminated_union"
    XOR = "xor"
    INTERSECTION = "intersection"

    # Wrappers
    PIPE = "pipe"
    TRANSFORM = "transform"
    LAZY = "lazy"


INTEGER_TYPES = frozenset({
    TypeCode.INT, TypeCode.INT8, TypeCode.INT16, TypeCode.INT32, TypeCode.INT64,
    TypeCode.UINT, TypeCode.UINT8, TypeCode.UINT16, TypeCode.UINT32, TypeCode.UINT64,
    TypeCode.BIGINT,
})

FLOAT_TYPES = frozenset({TypeCode.FLOAT32, TypeCode.FLOAT64})

NUMERIC_TYPES = INTEGER_TYPES | FLOAT_TYPES
