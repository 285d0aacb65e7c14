"""Boolean schemas: plain booleans and booleans spelled as strings."""

from typing import Any, Dict, Optional, Sequence, Tuple

from zodkit.kernel.checks import Check, CheckParams
from zodkit.kernel.coercion import to_bool, to_string
from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.issues import invalid_value_issue
from zodkit.schemas.base import ZodType

DEFAULT_TRUTHY = ("true", "1", "yes", "on", "y", "enabled")
DEFAULT_FALSY = ("false", "0", "no", "off", "n", "disabled")

SENSITIVE = "sensitive"
INSENSITIVE = "insensitive"


class ZodBool(ZodType):
    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, isinstance(value, bool)

    def _coerce(self, value: Any) -> Any:
        return to_bool(value)


class StringBoolCheck(Check):
    """Maps a recognized spelling to its boolean. Preinstalled by stringbool schemas."""

    kind = "string_bool"

    def __init__(
        self,
        truthy: Sequence[str],
        falsy: Sequence[str],
        case: str = INSENSITIVE,
        params: Optional[CheckParams] = None,
    ) -> None:
        if case not in (SENSITIVE, INSENSITIVE):
            raise ValueError(f"case must be {SENSITIVE!r} or {INSENSITIVE!r}, got {case!r}")
        super().__init__(params)
        self.truthy = tuple(truthy)
        self.falsy = tuple(falsy)
        self.case = case
        self.abort = True
        self._lookup: Dict[str, bool] = {}
        for word in self.falsy:
            self._lookup[self._normalize(word)] = False
        for word in self.truthy:
            self._lookup[self._normalize(word)] = True

    def _normalize(self, word: str) -> str:
        return word.lower() if self.case == INSENSITIVE else word

    def _definition_params(self) -> Dict[str, Any]:
        return {"truthy": list(self.truthy), "falsy": list(self.falsy), "case": self.case}

    def _check(self, payload: ParsePayload, ctx: ParseContext) -> None:
        value = payload.value
        if not isinstance(value, str):
            return
        result = self._lookup.get(self._normalize(value))
        if result is None:
            payload.add_issue(invalid_value_issue(self.truthy + self.falsy, value))
        else:
            payload.value = result


class ZodStringBool(ZodType):
    """Strings such as ``"yes"`` or ``"off"`` parsed into booleans.

    Any string is recognized; the preinstalled StringBoolCheck turns a
    known spelling into ``True`` or ``False`` and reports any other string
    as invalid_value. Booleans themselves are not accepted, even when
    coercing.
    """

    @property
    def _spelling(self) -> StringBoolCheck:
        return next(c for c in self._zod.checks if isinstance(c, StringBoolCheck))

    @property
    def truthy(self) -> Tuple[str, ...]:
        return self._spelling.truthy

    @property
    def falsy(self) -> Tuple[str, ...]:
        return self._spelling.falsy

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, isinstance(value, str)

    def _coerce(self, value: Any) -> Any:
        if isinstance(value, bool):
            raise TypeError("refusing to coerce bool to stringbool")
        return to_string(value)
