"""zodkit: composable runtime schemas for validating and parsing untyped data."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("zodkit")
except PackageNotFoundError:
    __version__ = "dev"

from zodkit import coerce
from zodkit.api import (
    any_,
    array,
    array_ptr,
    bigint,
    bigint_ptr,
    bool_,
    bool_ptr,
    complex64,
    complex64_ptr,
    complex128,
    complex128_ptr,
    complex_,
    custom,
    discriminated_union,
    discriminated_union_ptr,
    enum,
    float32,
    float32_ptr,
    float64,
    float64_ptr,
    int8,
    int8_ptr,
    int16,
    int16_ptr,
    int32,
    int32_ptr,
    int64,
    int64_ptr,
    int_,
    int_ptr,
    intersection,
    lazy,
    lazy_ptr,
    literal,
    loose_object,
    loose_object_ptr,
    loose_record,
    loose_record_ptr,
    map_,
    map_ptr,
    native_enum,
    never,
    nil,
    number,
    number_ptr,
    object_,
    object_ptr,
    partial_record,
    partial_record_ptr,
    preprocess,
    record,
    record_ptr,
    set_,
    set_ptr,
    slice_,
    slice_ptr,
    strict_object,
    strict_object_ptr,
    string,
    string_ptr,
    stringbool,
    strip_object,
    strip_object_ptr,
    time,
    time_ptr,
    tuple_,
    tuple_ptr,
    uint,
    uint_ptr,
    uint8,
    uint8_ptr,
    uint16,
    uint16_ptr,
    uint32,
    uint32_ptr,
    uint64,
    uint64_ptr,
    union,
    unknown,
    xor,
    xor_ptr,
)
from zodkit.codes import IssueCode, TypeCode
from zodkit.config import ZodConfig, configure, get_config, reset_config
from zodkit.errors import (
    ZodError,
    as_zod_error,
    flatten_error,
    format_error,
    is_zod_error,
    prettify_error,
    to_dot_path,
    treeify_error,
)
from zodkit.kernel.checks import CheckParams
from zodkit.kernel.context import ParseContext, ParsePayload, RefinementContext
from zodkit.kernel.internals import SchemaParams
from zodkit.kernel.issues import Issue, RawIssue
from zodkit.kernel.ref import Ref
from zodkit.kernel.registry import GlobalMeta, Registry, global_registry
from zodkit.schemas import ParseResult, ZodType

__all__ = [
    "__version__",
    # factories
    "string",
    "string_ptr",
    "bool_",
    "bool_ptr",
    "stringbool",
    "time",
    "time_ptr",
    "int_",
    "int_ptr",
    "int8",
    "int8_ptr",
    "int16",
    "int16_ptr",
    "int32",
    "int32_ptr",
    "int64",
    "int64_ptr",
    "uint",
    "uint_ptr",
    "uint8",
    "uint8_ptr",
    "uint16",
    "uint16_ptr",
    "uint32",
    "uint32_ptr",
    "uint64",
    "uint64_ptr",
    "bigint",
    "bigint_ptr",
    "float32",
    "float32_ptr",
    "float64",
    "float64_ptr",
    "number",
    "number_ptr",
    "complex64",
    "complex64_ptr",
    "complex128",
    "complex128_ptr",
    "complex_",
    "enum",
    "native_enum",
    "literal",
    "nil",
    "any_",
    "unknown",
    "never",
    "custom",
    "array",
    "array_ptr",
    "tuple_",
    "tuple_ptr",
    "slice_",
    "slice_ptr",
    "set_",
    "set_ptr",
    "object_",
    "object_ptr",
    "strict_object",
    "strict_object_ptr",
    "strip_object",
    "strip_object_ptr",
    "loose_object",
    "loose_object_ptr",
    "record",
    "record_ptr",
    "partial_record",
    "partial_record_ptr",
    "loose_record",
    "loose_record_ptr",
    "map_",
    "map_ptr",
    "union",
    "xor",
    "xor_ptr",
    "discriminated_union",
    "discriminated_union_ptr",
    "intersection",
    "lazy",
    "lazy_ptr",
    "preprocess",
    "coerce",
    # parsing
    "ZodType",
    "ParseResult",
    "ParseContext",
    "ParsePayload",
    "RefinementContext",
    "Ref",
    "SchemaParams",
    "CheckParams",
    # errors
    "ZodError",
    "Issue",
    "RawIssue",
    "IssueCode",
    "TypeCode",
    "is_zod_error",
    "as_zod_error",
    "prettify_error",
    "format_error",
    "treeify_error",
    "flatten_error",
    "to_dot_path",
    # configuration and metadata
    "ZodConfig",
    "configure",
    "get_config",
    "reset_config",
    "Registry",
    "GlobalMeta",
    "global_registry",
]
