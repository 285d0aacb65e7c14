"""String schema and its check catalog."""

import re
from typing import Any, Tuple, Union

from zodkit.kernel.checks import (
    ExactSize,
    MaxSize,
    MinSize,
    RegexCheck,
    StringPredicateCheck,
    normalize_check_params,
)
from zodkit.kernel.coercion import to_string
from zodkit.kernel.formats import FORMAT_PREDICATES
from zodkit.schemas.base import ZodType


class ZodString(ZodType):
    """Accepts ``str``. Coercion renders numbers, bools, bytes and datetimes."""

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, isinstance(value, str)

    def _coerce(self, value: Any) -> Any:
        return to_string(value)

    # -- length -------------------------------------------------------------

    def min(self, minimum: int, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._with_check(MinSize(minimum, "string", normalize_check_params(params, **kwargs)))

    def max(self, maximum: int, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._with_check(MaxSize(maximum, "string", normalize_check_params(params, **kwargs)))

    def length(self, size: int, params: Any = None, **kwargs: Any) -> "ZodString":
        check = ExactSize(size, "string", normalize_check_params(params, **kwargs), kind="length")
        return self._with_check(check)

    def non_empty(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self.min(1, params, **kwargs)

    # -- content ------------------------------------------------------------

    def regex(self, pattern: Union[str, "re.Pattern[str]"], params: Any = None, **kwargs: Any) -> "ZodString":
        return self._with_check(RegexCheck(pattern, normalize_check_params(params, **kwargs)))

    def includes(self, substring: str, params: Any = None, **kwargs: Any) -> "ZodString":
        check = StringPredicateCheck(
            "includes",
            lambda v: substring in v,
            normalize_check_params(params, **kwargs),
            includes=substring,
        )
        return self._with_check(check)

    def starts_with(self, prefix: str, params: Any = None, **kwargs: Any) -> "ZodString":
        check = StringPredicateCheck(
            "starts_with",
            lambda v: v.startswith(prefix),
            normalize_check_params(params, **kwargs),
            prefix=prefix,
        )
        return self._with_check(check)

    def ends_with(self, suffix: str, params: Any = None, **kwargs: Any) -> "ZodString":
        check = StringPredicateCheck(
            "ends_with",
            lambda v: v.endswith(suffix),
            normalize_check_params(params, **kwargs),
            suffix=suffix,
        )
        return self._with_check(check)

    def lowercase(self, params: Any = None, **kwargs: Any) -> "ZodString":
        check = StringPredicateCheck("lowercase", lambda v: v == v.lower(), normalize_check_params(params, **kwargs))
        return self._with_check(check)

    def uppercase(self, params: Any = None, **kwargs: Any) -> "ZodString":
        check = StringPredicateCheck("uppercase", lambda v: v == v.upper(), normalize_check_params(params, **kwargs))
        return self._with_check(check)

    # -- formats ------------------------------------------------------------

    def _format(self, name: str, params: Any, kwargs: Any) -> "ZodString":
        check = StringPredicateCheck(name, FORMAT_PREDICATES[name], normalize_check_params(params, **kwargs))
        return self._with_check(check)

    def email(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("email", params, kwargs)

    def url(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("url", params, kwargs)

    def uuid(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("uuid", params, kwargs)

    def guid(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("guid", params, kwargs)

    def ipv4(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("ipv4", params, kwargs)

    def ipv6(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("ipv6", params, kwargs)

    def cidrv4(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("cidrv4", params, kwargs)

    def cidrv6(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("cidrv6", params, kwargs)

    def base64(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("base64", params, kwargs)

    def base64url(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("base64url", params, kwargs)

    def jwt(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("jwt", params, kwargs)

    def e164(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("e164", params, kwargs)

    def iso_datetime(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("datetime", params, kwargs)

    def iso_date(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("date", params, kwargs)

    def iso_time(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("time", params, kwargs)

    def iso_duration(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("duration", params, kwargs)

    def cuid(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("cuid", params, kwargs)

    def cuid2(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("cuid2", params, kwargs)

    def ulid(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("ulid", params, kwargs)

    def xid(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("xid", params, kwargs)

    def ksuid(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("ksuid", params, kwargs)

    def nanoid(self, params: Any = None, **kwargs: Any) -> "ZodString":
        return self._format("nanoid", params, kwargs)

    # -- normalisation (overwrite) ------------------------------------------

    def trim(self) -> "ZodString":
        return self.overwrite(str.strip)

    def to_lower_case(self) -> "ZodString":
        return self.overwrite(str.lower)

    def to_upper_case(self) -> "ZodString":
        return self.overwrite(str.upper)
