"""Coercing variants of the leaf factories.

``coerce.float64()`` is ``float64(coerce=True)``: inputs of another type
are converted before type recognition, and a failed conversion is an
invalid_type issue.
"""

from typing import Any

from zodkit import api
from zodkit.schemas.boolean import ZodBool, ZodStringBool
from zodkit.schemas.numeric import ZodBigInt, ZodComplex, ZodFloat, ZodInt
from zodkit.schemas.string import ZodString
from zodkit.schemas.time import ZodTime


def string(params: Any = None, **kwargs: Any) -> ZodString:
    return api.string(params, **{**kwargs, "coerce": True})


def bool_(params: Any = None, **kwargs: Any) -> ZodBool:
    return api.bool_(params, **{**kwargs, "coerce": True})


def stringbool(params: Any = None, **kwargs: Any) -> ZodStringBool:
    return api.stringbool(params, **{**kwargs, "coerce": True})


def time(params: Any = None, **kwargs: Any) -> ZodTime:
    return api.time(params, **{**kwargs, "coerce": True})


def int_(params: Any = None, **kwargs: Any) -> ZodInt:
    return api.int_(params, **{**kwargs, "coerce": True})


def int8(params: Any = None, **kwargs: Any) -> ZodInt:
    return api.int8(params, **{**kwargs, "coerce": True})


def int16(params: Any = None, **kwargs: Any) -> ZodInt:
    return api.int16(params, **{**kwargs, "coerce": True})


def int32(params: Any = None, **kwargs: Any) -> ZodInt:
    return api.int32(params, **{**kwargs, "coerce": True})


def int64(params: Any = None, **kwargs: Any) -> ZodInt:
    return api.int64(params, **{**kwargs, "coerce": True})


def uint(params: Any = None, **kwargs: Any) -> ZodInt:
    return api.uint(params, **{**kwargs, "coerce": True})


def uint8(params: Any = None, **kwargs: Any) -> ZodInt:
    return api.uint8(params, **{**kwargs, "coerce": True})


def uint16(params: Any = None, **kwargs: Any) -> ZodInt:
    return api.uint16(params, **{**kwargs, "coerce": True})


def uint32(params: Any = None, **kwargs: Any) -> ZodInt:
    return api.uint32(params, **{**kwargs, "coerce": True})


def uint64(params: Any = None, **kwargs: Any) -> ZodInt:
    return api.uint64(params, **{**kwargs, "coerce": True})


def bigint(params: Any = None, **kwargs: Any) -> ZodBigInt:
    return api.bigint(params, **{**kwargs, "coerce": True})


def float32(params: Any = None, **kwargs: Any) -> ZodFloat:
    return api.float32(params, **{**kwargs, "coerce": True})


def float64(params: Any = None, **kwargs: Any) -> ZodFloat:
    return api.float64(params, **{**kwargs, "coerce": True})


number = float64


def complex64(params: Any = None, **kwargs: Any) -> ZodComplex:
    return api.complex64(params, **{**kwargs, "coerce": True})


def complex128(params: Any = None, **kwargs: Any) -> ZodComplex:
    return api.complex128(params, **{**kwargs, "coerce": True})
