"""ZodType: the base every schema derives from.

Holds the parse surface (parse / safe_parse / strict_parse / parse_any)
and the copy-on-write modifiers. Modifiers never touch the receiver:
they clone its internals, change the clone, and wrap it in a fresh
instance of the same class.
"""

import copy
from typing import Any, Callable, List, NamedTuple, Optional, Tuple, TypeVar

from zodkit.errors import ZodError
from zodkit.kernel import engine
from zodkit.kernel.checks import (
    Check,
    CustomCheck,
    OverwriteCheck,
    normalize_check_params,
)
from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.internals import DESCRIPTION, Constraint, SchemaInternals
from zodkit.kernel.issues import RawIssue, finalize_issue
from zodkit.kernel.registry import GlobalMeta, global_registry

S = TypeVar("S", bound="ZodType")


class ParseResult(NamedTuple):
    """``(value, error)``; exactly one of the two is meaningful."""

    value: Any
    error: Optional[ZodError]

    @property
    def success(self) -> bool:
        return self.error is None


def build_error(issues: List[RawIssue], ctx: ParseContext) -> ZodError:
    """Finalize raw issues at the parse boundary."""
    return ZodError([
        finalize_issue(raw, ctx.error, ctx.config, ctx.report_input, ctx.path)
        for raw in issues
    ])


class ZodType:
    """Base schema.

    Subclasses customise four hooks:

    - ``_accept(value) -> (value, ok)``: type recognition
    - ``_coerce(value)``: conversion used when the coerce flag is set
    - ``_validate(payload, ctx)``: child dispatch for container schemas
    - ``_expected``: the type name reported by invalid_type issues
    """

    # Schemas that make sense of None themselves (unions, pipes, nil, any...).
    _accepts_nil = False
    # Complex schemas validate children and honour prefault on type mismatch.
    _complex = False

    def __init__(self, internals: SchemaInternals) -> None:
        self._zod = internals
        internals.constructor = self._rebuild

    # -- hooks --------------------------------------------------------------

    @property
    def _expected(self) -> Any:
        return self._zod.type

    def _accept(self, value: Any) -> Tuple[Any, bool]:
        return value, True

    def _coerce(self, value: Any) -> Any:
        raise TypeError(f"{self._zod.type.value} schemas do not coerce")

    def _validate(self, payload: ParsePayload, ctx: ParseContext) -> None:
        """Container hook; leaves have nothing to dispatch."""

    def _own_issue(self, payload: ParsePayload, raw: RawIssue) -> RawIssue:
        """Record an issue raised by this container itself rather than by a child."""
        if self._zod.error is not None:
            raw.inst = self._zod
        return payload.add_issue(raw)

    # -- construction -------------------------------------------------------

    def _rebuild(self: S, internals: SchemaInternals) -> S:
        new = copy.copy(self)
        new._zod = internals
        internals.constructor = new._rebuild
        return new

    def _clone(self: S, **changes: Any) -> S:
        internals = self._zod.clone()
        for name, value in changes.items():
            setattr(internals, name, value)
        return internals.constructor(internals)

    def _with_check(self: S, check: Check) -> S:
        internals = self._zod.clone()
        internals.add_check(check)
        return internals.constructor(internals)

    @property
    def internals(self) -> SchemaInternals:
        return self._zod

    @property
    def type(self):
        return self._zod.type

    @property
    def description(self) -> Optional[str]:
        meta = global_registry.get(self)
        if meta is not None and meta.description is not None:
            return meta.description
        return self._zod.bag.get(DESCRIPTION)

    def is_optional(self) -> bool:
        return self._zod.optional

    def is_nilable(self) -> bool:
        return self._zod.nilable

    # -- parsing ------------------------------------------------------------

    def _run(self, value: Any, ctx: ParseContext) -> ParsePayload:
        return engine.run(self, value, ctx, complex_type=self._complex)

    def _finish(self, payload: ParsePayload, ctx: ParseContext) -> ParseResult:
        if payload.issues:
            return ParseResult(None, build_error(payload.issues, ctx))
        return ParseResult(payload.value, None)

    def safe_parse(self, value: Any, ctx: Optional[ParseContext] = None) -> ParseResult:
        """Parse untyped input; returns ``(value, None)`` or ``(None, ZodError)``."""
        ctx = ctx if ctx is not None else ParseContext()
        return self._finish(self._run(value, ctx), ctx)

    def parse(self, value: Any, ctx: Optional[ParseContext] = None) -> Any:
        """Parse untyped input, raising ZodError on failure."""
        result = self.safe_parse(value, ctx)
        if result.error is not None:
            raise result.error
        return result.value

    def safe_strict_parse(self, value: Any, ctx: Optional[ParseContext] = None) -> ParseResult:
        """Parse input already known to have the schema's type.

        Coercion and type recognition are skipped; checks (and, for
        containers, child validation) still run.
        """
        ctx = ctx if ctx is not None else ParseContext()
        payload = engine.parse_strict(self, value, ctx, complex_type=self._complex)
        return self._finish(payload, ctx)

    def strict_parse(self, value: Any, ctx: Optional[ParseContext] = None) -> Any:
        result = self.safe_strict_parse(value, ctx)
        if result.error is not None:
            raise result.error
        return result.value

    def parse_any(self, value: Any, ctx: Optional[ParseContext] = None) -> ParseResult:
        """Untyped entry point used when schemas are handled generically."""
        return self.safe_parse(value, ctx)

    # -- modifiers ----------------------------------------------------------

    def optional(self: S) -> S:
        return self._clone(optional=True)

    def nilable(self: S) -> S:
        return self._clone(nilable=True)

    def nullish(self: S) -> S:
        return self._clone(optional=True, nilable=True)

    def non_optional(self: S) -> S:
        """Revoke optionality: None now fails with non_optional_absent."""
        return self._clone(optional=False, non_optional=True)

    def default(self: S, value: Any) -> S:
        """Return ``value`` for None input without running any check."""
        return self._clone(default_value=value, default_func=None)

    def default_func(self: S, fn: Callable[[], Any]) -> S:
        """Like default, but ``fn()`` is evaluated each time None is seen."""
        return self._clone(default_func=fn)

    def prefault(self: S, value: Any) -> S:
        """Substitute ``value`` for None input and validate it like any other input."""
        return self._clone(prefault_value=value, prefault_func=None)

    def prefault_func(self: S, fn: Callable[[], Any]) -> S:
        return self._clone(prefault_func=fn)

    def refine(self: S, fn: Callable[[Any], Any], params: Any = None, **kwargs: Any) -> S:
        """Add a predicate check; a falsy result records a custom issue.

        For ref-constrained schemas the predicate also sees None.
        """
        check_params = normalize_check_params(params, **kwargs)
        accepts_nil = self._zod.constraint is Constraint.REF
        return self._with_check(CustomCheck(fn, check_params, accepts_nil=accepts_nil))

    def refine_any(self: S, fn: Callable[[Any], Any], params: Any = None, **kwargs: Any) -> S:
        """Untyped refine: the predicate is also called with None on nilable schemas."""
        check_params = normalize_check_params(params, **kwargs)
        return self._with_check(CustomCheck(fn, check_params, accepts_nil=True))

    def check(self: S, fn: Callable[[ParsePayload], None], params: Any = None, **kwargs: Any) -> S:
        """Add a payload-level check that records its own issues."""
        check_params = normalize_check_params(params, **kwargs)
        return self._with_check(CustomCheck(fn, check_params, mode="check"))

    def overwrite(self: S, fn: Callable[[Any], Any]) -> S:
        """Replace the validated value with ``fn(value)``; the type stays the same."""
        return self._with_check(OverwriteCheck(fn))

    def transform(self, fn: Callable[..., Any]) -> "ZodType":
        """Pipe this schema's output into ``fn(value[, ctx])``."""
        from zodkit.schemas.pipe import ZodPipe, ZodTransform

        return ZodPipe(self, ZodTransform(fn))

    def pipe(self, target: "ZodType") -> "ZodType":
        """Feed this schema's validated output into ``target``."""
        from zodkit.schemas.pipe import ZodPipe

        return ZodPipe(self, target)

    def or_(self, other: "ZodType") -> "ZodType":
        from zodkit.schemas.union import build_union

        return build_union([self, other])

    def and_(self, other: "ZodType") -> "ZodType":
        from zodkit.schemas.intersection import build_intersection

        return build_intersection(self, other)

    # -- metadata -----------------------------------------------------------

    def describe(self: S, description: str) -> S:
        """Return a copy registered with ``description`` (other metadata carried over)."""
        new = self._clone()
        new._zod.bag[DESCRIPTION] = description
        current = global_registry.get(self) or GlobalMeta()
        global_registry.add(new, current.merged(description=description))
        return new

    def meta(self, meta: Any = None, **fields: Any) -> Any:
        """With no arguments, return this schema's registered metadata.

        Otherwise return a copy registered with the given metadata merged
        over whatever this schema already had.
        """
        if meta is None and not fields:
            return global_registry.get(self)
        data = dict(meta.model_dump(exclude_none=True) if isinstance(meta, GlobalMeta) else (meta or {}))
        data.update(fields)
        new = self._clone()
        current = global_registry.get(self) or GlobalMeta()
        merged = current.merged(**data)
        global_registry.add(new, merged)
        if merged.description is not None:
            new._zod.bag[DESCRIPTION] = merged.description
        return new

    def __repr__(self) -> str:
        flags = [name for name in ("optional", "nilable", "non_optional", "coerce") if getattr(self._zod, name)]
        suffix = f" [{', '.join(flags)}]" if flags else ""
        return f"<{type(self).__name__} {self._zod.type.value}{suffix}>"
