"""Per-parse state: the context shared by a whole parse and the payload each schema fills."""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from zodkit.config import ZodConfig, get_config
from zodkit.kernel.issues import (
    ErrorMap,
    IssueLike,
    PathAtom,
    RawIssue,
    coerce_issue,
    custom_issue,
    to_error_map,
)


@dataclass
class ParseContext:
    """Configuration for one parse invocation.

    Contexts are passed by reference down the schema tree; checks and
    callbacks must not hold on to them after returning.
    """

    error: Optional[ErrorMap] = None
    report_input: bool = False
    path: Tuple[PathAtom, ...] = ()
    config: ZodConfig = field(default_factory=get_config)

    def __post_init__(self) -> None:
        self.error = to_error_map(self.error)
        self.path = tuple(self.path)


class ParsePayload:
    """Mutable carrier for the current value and the issues found so far."""

    __slots__ = ("value", "issues", "path")

    def __init__(self, value: Any = None, path: Sequence[PathAtom] = ()) -> None:
        self.value = value
        self.issues: List[RawIssue] = []
        self.path: List[PathAtom] = list(path)

    def add_issue(self, issue: IssueLike) -> RawIssue:
        """Append an issue; strings and mappings are accepted as shorthand."""
        raw = coerce_issue(issue, self.value)
        if self.path:
            raw.with_prefix(*self.path)
        self.issues.append(raw)
        return raw

    def add_issues(self, issues: Sequence[RawIssue], *prefix: PathAtom) -> None:
        """Fold a child's issues in, prefixing their paths with the child's atoms."""
        for raw in issues:
            if prefix:
                raw.with_prefix(*prefix)
            if self.path:
                raw.with_prefix(*self.path)
            self.issues.append(raw)

    def has_issues(self) -> bool:
        return bool(self.issues)

    def set_value(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"ParsePayload(value={self.value!r}, issues={len(self.issues)})"


class RefinementContext:
    """What transform and refine callbacks see besides the value itself."""

    def __init__(self, payload: ParsePayload, ctx: ParseContext) -> None:
        self._payload = payload
        self._ctx = ctx
        self.aborted = False

    @property
    def value(self) -> Any:
        return self._payload.value

    @property
    def issues(self) -> List[RawIssue]:
        return self._payload.issues

    @property
    def context(self) -> ParseContext:
        return self._ctx

    def add_issue(self, issue: Optional[IssueLike] = None, **properties: Any) -> RawIssue:
        """Record an issue against the value being transformed.

        ``ctx.add_issue("bad")`` and ``ctx.add_issue(message="bad",
        path=["field"])`` both produce a custom issue.
        """
        if issue is None:
            message = properties.pop("message", None)
            path = list(properties.pop("path", []) or [])
            raw = custom_issue(message, self._payload.value, **properties)
            raw.path = path
            issue = raw
        return self._payload.add_issue(issue)

    def abort(self, message: Optional[str] = None) -> None:
        """Stop the pipeline after this callback, recording a custom issue."""
        self.aborted = True
        self.add_issue(custom_issue(message, self._payload.value))
