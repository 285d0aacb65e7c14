"""Process-wide configuration: global error maps consulted during finalization."""

import threading
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from zodkit.kernel.issues import to_error_map


class ZodConfig(BaseModel):
    """Global error maps.

    - custom_error: consulted after per-issue, per-schema and per-context maps
    - locale_error: consulted after custom_error, before the built-in messages
    """

    custom_error: Optional[Callable[..., Optional[str]]] = None
    locale_error: Optional[Callable[..., Optional[str]]] = None

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    @field_validator("custom_error", "locale_error", mode="before")
    @classmethod
    def normalize_error_map(cls, v: Any) -> Any:
        """Accept the same string / mapping / callable forms as schema overrides."""
        return to_error_map(v)


_lock = threading.Lock()
_config = ZodConfig()


def get_config() -> ZodConfig:
    """Return the current global configuration."""
    return _config


def configure(config: Optional[ZodConfig] = None, **changes: Any) -> ZodConfig:
    """Replace the global configuration.

    Either pass a whole ``ZodConfig`` or keyword changes merged into the
    current one. Passing ``custom_error=None`` clears that map.

    Returns:
        The configuration now in effect.
    """
    global _config
    with _lock:
        base = config if config is not None else _config
        if changes:
            merged = base.model_dump()
            merged.update(changes)
            base = ZodConfig(**merged)
        _config = base
        return _config


def reset_config() -> ZodConfig:
    """Restore the built-in defaults."""
    return configure(ZodConfig())
