"""Unions, exclusive (xor) unions and discriminated unions."""

import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple

from zodkit.codes import TypeCode
from zodkit.kernel.checks import same_value
from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.internals import CONSTRUCTION_ERROR, SchemaInternals, normalize_params
from zodkit.kernel.issues import RawIssue, invalid_union_issue
from zodkit.kernel.messages import stringify_primitive
from zodkit.schemas.base import ZodType

logger = logging.getLogger(__name__)

_MISSING = object()


class ZodUnion(ZodType):
    """First option that accepts the input wins, in declaration order.

    When every option fails, a single invalid_union issue carries each
    option's issues under ``errors``.
    """

    _accepts_nil = True
    _complex = True

    def __init__(self, internals: SchemaInternals, options: Sequence[ZodType]) -> None:
        super().__init__(internals)
        self._options: Tuple[ZodType, ...] = tuple(options)

    @property
    def options(self) -> Tuple[ZodType, ...]:
        return self._options

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        self._try_options(self._options, payload, ctx)

    def _try_options(self, options: Sequence[ZodType], payload: ParsePayload, ctx: ParseContext) -> None:
        errors: List[List[RawIssue]] = []
        for option in options:
            child = option._run(payload.value, ctx)
            if not child.issues:
                payload.value = child.value
                return
            errors.append(child.issues)
        self._own_issue(payload, invalid_union_issue(errors, payload.value))


class ZodXor(ZodUnion):
    """Exactly one option may accept the input.

    Every option is tried. With no match, a single invalid_union issue
    carries each option's issues; with several, the invalid_union issue
    has ``inclusive`` false, no ``errors`` and the match count in params.
    """

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        errors: List[List[RawIssue]] = []
        matches: List[Any] = []
        for option in self._options:
            child = option._run(payload.value, ctx)
            if child.issues:
                errors.append(child.issues)
            else:
                matches.append(child.value)
        if len(matches) == 1:
            payload.value = matches[0]
        elif not matches:
            self._own_issue(payload, invalid_union_issue(errors, payload.value))
        else:
            logger.debug("xor input matched %d options", len(matches))
            issue = invalid_union_issue([], payload.value, inclusive=False, match_count=len(matches))
            self._own_issue(payload, issue)


class ZodDiscriminatedUnion(ZodUnion):
    """Routes mapping input to the option whose discriminator field accepts its tag.

    Options are indexed once, at construction, from the literal or enum
    values of each option's discriminator field. Missing or duplicate
    values are recorded as a deferred construction error. Input whose tag
    matches no option falls back to trying every option.
    """

    _accepts_nil = False

    def __init__(self, internals: SchemaInternals, discriminator: str, options: Sequence[ZodType]) -> None:
        super().__init__(internals, options)
        self._discriminator = discriminator
        self._index: List[Tuple[Any, ZodType]] = []
        error = self._build_index()
        if error is not None:
            internals.bag[CONSTRUCTION_ERROR] = error
            logger.debug("discriminated union on %r deferred construction error: %s", discriminator, error)

    @property
    def discriminator(self) -> str:
        return self._discriminator

    @property
    def _expected(self) -> Any:
        return "object"

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, isinstance(value, Mapping)

    def _build_index(self) -> Optional[str]:
        for position, option in enumerate(self._options):
            shape = getattr(option, "shape", None)
            field = shape.get(self._discriminator) if isinstance(shape, dict) else None
            values = field._zod.values if field is not None else None
            if not values:
                return f"option {position} has no literal or enum value for discriminator {self._discriminator!r}"
            for tag in values:
                if self._lookup(tag) is not None:
                    return f"duplicate discriminator value {stringify_primitive(tag)} for {self._discriminator!r}"
                self._index.append((tag, option))
        return None

    def _lookup(self, tag: Any) -> Optional[ZodType]:
        for known, option in self._index:
            if same_value(known, tag):
                return option
        return None

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        tag = payload.value.get(self._discriminator, _MISSING)
        option = self._lookup(tag) if tag is not _MISSING else None
        if option is None:
            logger.debug("no option for discriminator %r; trying every option", self._discriminator)
            self._try_options(self._options, payload, ctx)
            return
        child = option._run(payload.value, ctx)
        if child.issues:
            payload.add_issues(child.issues)
        else:
            payload.value = child.value


def build_union(options: Sequence[ZodType], params: Any = None) -> ZodUnion:
    return ZodUnion(SchemaInternals.from_params(TypeCode.UNION, normalize_params(params)), options)


def build_discriminated_union(discriminator: str, options: Sequence[ZodType], params: Any = None) -> ZodDiscriminatedUnion:
    internals = SchemaInternals.from_params(TypeCode.DISCRIMINATED_UNION, normalize_params(params))
    return ZodDiscriminatedUnion(internals, discriminator, options)


def build_xor(options: Sequence[ZodType], params: Any = None) -> ZodXor:
    return ZodXor(SchemaInternals.from_params(TypeCode.XOR, normalize_params(params)), options)
