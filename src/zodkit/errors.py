"""The aggregated validation error and helpers for presenting it.

Every parse entry point reports failure through ZodError. The helpers
reshape its issue list for common consumers: a one-line summary, a
nested ``_errors`` tree, an ``errors/properties/items`` tree, and a flat
form/field split.
"""

import re
from typing import Any, Callable, Dict, List, Optional, Sequence

from zodkit._internal.canonical_json import canonical_dumps
from zodkit.codes import IssueCode
from zodkit.kernel.issues import Issue

IssueMapper = Callable[[Issue], str]

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class ZodError(ValueError):
    """Raised (or returned) when input fails validation.

    Attributes:
        issues: Finalized issues in the order they were found.
    """

    def __init__(self, issues: Sequence[Issue]) -> None:
        self.issues: List[Issue] = list(issues)
        super().__init__(prettify_error(self))

    @property
    def codes(self) -> List[IssueCode]:
        return [issue.code for issue in self.issues]

    def prettify(self) -> str:
        return prettify_error(self)

    def format(self, mapper: Optional[IssueMapper] = None) -> Dict[str, Any]:
        return format_error(self, mapper)

    def treeify(self, mapper: Optional[IssueMapper] = None) -> Dict[str, Any]:
        return treeify_error(self, mapper)

    def flatten(self, mapper: Optional[IssueMapper] = None) -> Dict[str, Any]:
        return flatten_error(self, mapper)

    def to_list(self) -> List[Dict[str, Any]]:
        return [issue.to_dict() for issue in self.issues]

    def to_json(self) -> str:
        """Canonical JSON for the issue list (sorted keys, stable separators)."""
        return canonical_dumps(self.to_list())

    def __repr__(self) -> str:
        return f"ZodError(issues={len(self.issues)})"


def is_zod_error(err: Any) -> bool:
    """True when ``err`` is a ZodError."""
    return isinstance(err, ZodError)


def as_zod_error(err: Any) -> Optional[ZodError]:
    """Return ``err`` as a ZodError, looking through ``__cause__`` chains; None otherwise."""
    seen = set()
    while err is not None and id(err) not in seen:
        if isinstance(err, ZodError):
            return err
        seen.add(id(err))
        err = getattr(err, "__cause__", None)
    return None


def to_dot_path(path: Sequence[Any]) -> str:
    """Render a path like ``user.tags[0]["display name"]``."""
    parts: List[str] = []
    for i, atom in enumerate(path):
        if isinstance(atom, bool) or not isinstance(atom, (str, int)):
            parts.append(f"[{atom!r}]")
        elif isinstance(atom, int):
            parts.append(f"[{atom}]")
        elif i == 0 and _IDENTIFIER.match(atom):
            parts.append(atom)
        elif _IDENTIFIER.match(atom):
            parts.append(f".{atom}")
        else:
            parts.append(f'["{atom}"]')
    return "".join(parts)


def _message(issue: Issue) -> str:
    return issue.message


def prettify_error(err: ZodError) -> str:
    """One line per error: ``path: message`` joined with ``; ``."""
    if not err.issues:
        return "Validation failed"
    parts = []
    for issue in err.issues:
        if issue.path:
            parts.append(f"{to_dot_path(issue.path)}: {issue.message}")
        else:
            parts.append(issue.message)
    return "; ".join(parts)


def format_error(err: ZodError, mapper: Optional[IssueMapper] = None) -> Dict[str, Any]:
    """Nested dict mirroring the input shape; each node has an ``_errors`` list.

    Union, key and element issues are expanded into their nested issues.
    """
    mapper = mapper or _message
    root: Dict[str, Any] = {"_errors": []}

    def process(issues: Sequence[Issue], prefix: tuple) -> None:
        for issue in issues:
            if issue.code == IssueCode.INVALID_UNION and issue.errors:
                for option in issue.errors:
                    process(option, prefix + issue.path)
                continue
            if issue.code in (IssueCode.INVALID_KEY, IssueCode.INVALID_ELEMENT) and issue.issues:
                process(issue.issues, prefix + issue.path)
                continue
            path = prefix + issue.path
            node = root
            for atom in path:
                node = node.setdefault(str(atom), {"_errors": []})
            node["_errors"].append(mapper(issue))

    process(err.issues, ())
    return root


def _tree_node() -> Dict[str, Any]:
    return {"errors": []}


def treeify_error(err: ZodError, mapper: Optional[IssueMapper] = None) -> Dict[str, Any]:
    """Tree with ``errors`` at each node, ``properties`` for keys and ``items`` for indices."""
    mapper = mapper or _message
    tree = _tree_node()
    for issue in err.issues:
        node = tree
        for atom in issue.path:
            if isinstance(atom, int) and not isinstance(atom, bool):
                items = node.setdefault("items", [])
                while len(items) <= atom:
                    items.append(_tree_node())
                node = items[atom]
            else:
                node = node.setdefault("properties", {}).setdefault(str(atom), _tree_node())
        node["errors"].append(mapper(issue))
    return tree


def flatten_error(err: ZodError, mapper: Optional[IssueMapper] = None) -> Dict[str, Any]:
    """Split into ``form_errors`` (empty path) and ``field_errors`` keyed by first path atom."""
    mapper = mapper or _message
    form_errors: List[str] = []
    field_errors: Dict[str, List[str]] = {}
    for issue in err.issues:
        if not issue.path:
            form_errors.append(mapper(issue))
        else:
            field_errors.setdefault(str(issue.path[0]), []).append(mapper(issue))
    return {"form_errors": form_errors, "field_errors": field_errors}
