"""Time schema over ``datetime.datetime``."""

import datetime
from typing import Any, Tuple

from zodkit.kernel.checks import RangeCheck, normalize_check_params
from zodkit.kernel.coercion import to_time
from zodkit.schemas.base import ZodType


def _as_aware(value: datetime.datetime) -> datetime.datetime:
    # Naive datetimes are read as UTC.
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value


class TimeRangeCheck(RangeCheck):
    """Range check that can compare naive and aware datetimes."""

    def _operands(self, value: Any) -> Tuple[Any, Any]:
        return _as_aware(value), _as_aware(self.bound)


class ZodTime(ZodType):
    """Accepts ``datetime.datetime``; coercion reads ISO-8601 strings and Unix timestamps."""

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, isinstance(value, datetime.datetime)

    def _coerce(self, value: Any) -> Any:
        return to_time(value)

    def min(self, value: datetime.datetime, params: Any = None, **kwargs: Any) -> "ZodTime":
        return self._with_check(TimeRangeCheck("gte", value, "time", normalize_check_params(params, **kwargs)))

    def max(self, value: datetime.datetime, params: Any = None, **kwargs: Any) -> "ZodTime":
        return self._with_check(TimeRangeCheck("lte", value, "time", normalize_check_params(params, **kwargs)))

    def after(self, value: datetime.datetime, params: Any = None, **kwargs: Any) -> "ZodTime":
        return self.min(value, params, **kwargs)

    def before(self, value: datetime.datetime, params: Any = None, **kwargs: Any) -> "ZodTime":
        return self.max(value, params, **kwargs)
