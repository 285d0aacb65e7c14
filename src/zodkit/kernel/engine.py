"""Parse engine: the uniform pipeline every schema runs through.

Pipeline for one schema and one input:

1. deferred construction error -> construction_failed issue
2. Ref input is unwrapped (and remembered for write-back)
3. None input: non_optional -> default -> prefault -> optional/nilable
   -> invalid_type (schemas that accept None themselves skip the last step)
4. coercion (coerce flag) and type recognition
5. container validation (children) for complex schemas
6. checks in declaration order
7. constraint conversion (value or Ref)

Issues stay raw here; finalization happens at the public parse boundary.
"""

import logging
from typing import Any, Optional

from zodkit.kernel.checks import run_checks
from zodkit.kernel.coercion import COERCION_ERRORS
from zodkit.kernel.context import ParseContext, ParsePayload
from zodkit.kernel.internals import Constraint, SchemaInternals
from zodkit.kernel.issues import (
    construction_failed_issue,
    invalid_type_issue,
    non_optional_issue,
)
from zodkit.kernel.ref import Ref

logger = logging.getLogger(__name__)


def convert_constraint(internals: SchemaInternals, value: Any, ref: Optional[Ref] = None) -> Any:
    """Shape a validated value for the caller.

    With the ref constraint, a caller-supplied Ref is updated in place
    and returned; otherwise a new Ref wraps the value. None stays None.
    """
    if internals.constraint is Constraint.REF:
        if value is None or isinstance(value, Ref):
            return value
        if ref is not None:
            ref.value = value
            return ref
        return Ref(value)
    return value


def _nil_checks(internals: SchemaInternals, payload: ParsePayload, ctx: ParseContext) -> None:
    # Ref-constrained nilable schemas still run refinements that opted into None.
    if internals.constraint is Constraint.REF:
        run_checks([c for c in internals.checks if c.accepts_nil], payload, ctx)


def _own(internals: SchemaInternals, payload: ParsePayload) -> ParsePayload:
    # Issues raised by this schema itself (not its children) resolve through its error override.
    if internals.error is not None:
        for raw in payload.issues:
            if getattr(raw.inst, "error", None) is None:
                raw.inst = internals
    return payload


def _shape_default(schema: Any, value: Any) -> Any:
    # Leaf defaults take the leaf's own representation (an int default on a float schema is a float).
    if schema._complex or value is None or isinstance(value, Ref):
        return value
    accepted, ok = schema._accept(value)
    return accepted if ok else value


def _recognize(schema: Any, internals: SchemaInternals, value: Any):
    accepted, ok = schema._accept(value)
    if not ok and internals.coerce:
        try:
            accepted, ok = schema._accept(schema._coerce(value))
        except COERCION_ERRORS:
            ok = False
    return accepted, ok


def run(schema: Any, value: Any, ctx: ParseContext, *, complex_type: bool = False, strict: bool = False) -> ParsePayload:
    """Run the pipeline for ``schema`` on ``value`` and return the raw payload."""
    internals: SchemaInternals = schema._zod
    payload = ParsePayload(value)

    reason = internals.construction_error
    if reason:
        logger.debug("surfacing deferred construction error for %s: %s", internals.type.value, reason)
        payload.add_issue(construction_failed_issue(reason, value))
        return _own(internals, payload)

    ref = value if isinstance(value, Ref) else None
    if ref is not None:
        value = ref.value

    prefaulted = False
    if value is None:
        if internals.non_optional:
            payload.add_issue(non_optional_issue(internals.type, value))
            return _own(internals, payload)
        if internals.has_default():
            payload.value = convert_constraint(internals, _shape_default(schema, internals.resolve_default()), ref)
            return payload
        if internals.has_prefault():
            value = internals.resolve_prefault()
            prefaulted = True
        elif internals.optional or internals.nilable:
            payload.value = None
            _nil_checks(internals, payload, ctx)
            return _own(internals, payload)
        elif not schema._accepts_nil:
            payload.add_issue(invalid_type_issue(schema._expected, value))
            return _own(internals, payload)

    if strict:
        accepted = value
    else:
        accepted, ok = _recognize(schema, internals, value)
        if not ok and complex_type and not prefaulted and internals.has_prefault():
            accepted, ok = _recognize(schema, internals, internals.resolve_prefault())
        if not ok:
            payload.add_issue(invalid_type_issue(schema._expected, value))
            return _own(internals, payload)

    payload.value = accepted
    if complex_type:
        schema._validate(payload, ctx)
        if payload.issues:
            return payload

    run_checks(internals.checks, payload, ctx)
    if not payload.issues:
        payload.value = convert_constraint(internals, payload.value, ref)
    return _own(internals, payload)


def parse_strict(schema: Any, value: Any, ctx: ParseContext, complex_type: bool = False) -> ParsePayload:
    """Skip coercion and type recognition; the caller vouches for the input's type."""
    return run(schema, value, ctx, complex_type=complex_type, strict=True)
