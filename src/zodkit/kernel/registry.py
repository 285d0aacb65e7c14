"""Schema metadata registry.

Associates schemas (by identity) with descriptive metadata. Entries are
held weakly: once user code drops a schema, its entry goes with it. The
registry is never consulted while parsing.
"""

import logging
import threading
import weakref
from typing import Any, Generic, Iterator, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

M = TypeVar("M")


class GlobalMeta(BaseModel):
    """Metadata stored in the global registry. Extra keys are kept."""

    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    examples: List[Any] = Field(default_factory=list)
    deprecated: Optional[bool] = None

    model_config = ConfigDict(extra="allow", frozen=True)

    def merged(self, **changes: Any) -> "GlobalMeta":
        """Return a copy with ``changes`` applied (None values are dropped)."""
        data = self.model_dump(exclude_none=True)
        data.update({k: v for k, v in changes.items() if v is not None})
        return GlobalMeta(**data)


class Registry(Generic[M]):
    """Thread-safe weak mapping from schema to metadata."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entries: "weakref.WeakKeyDictionary[Any, M]" = weakref.WeakKeyDictionary()

    def add(self, schema: Any, meta: M) -> "Registry[M]":
        with self._lock:
            self._entries[schema] = meta
        logger.debug("registered metadata for %s schema", _kind(schema))
        return self

    def get(self, schema: Any) -> Optional[M]:
        with self._lock:
            return self._entries.get(schema)

    def has(self, schema: Any) -> bool:
        with self._lock:
            return schema in self._entries

    def remove(self, schema: Any) -> "Registry[M]":
        with self._lock:
            self._entries.pop(schema, None)
        logger.debug("removed metadata for %s schema", _kind(schema))
        return self

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def by_id(self, schema_id: str) -> Optional[Any]:
        """Find the schema whose metadata carries ``id == schema_id``."""
        for schema, meta in self.items():
            if getattr(meta, "id", None) == schema_id or (
                isinstance(meta, dict) and meta.get("id") == schema_id
            ):
                return schema
        return None

    def items(self) -> List[Tuple[Any, M]]:
        with self._lock:
            return list(self._entries.items())

    def __contains__(self, schema: Any) -> bool:
        return self.has(schema)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return iter([schema for schema, _ in self.items()])


def _kind(schema: Any) -> str:
    internals = getattr(schema, "_zod", None)
    type_code = getattr(internals, "type", None)
    return getattr(type_code, "value", type(schema).__name__)


global_registry: Registry[GlobalMeta] = Registry()
