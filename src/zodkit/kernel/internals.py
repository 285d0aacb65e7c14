"""Shared per-schema state and the parameter models accepted by factories."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from zodkit.codes import TypeCode
from zodkit.kernel.issues import ErrorMap, to_error_map


class _Unset:
    """Marker for "no default/prefault configured" (None is a legal value)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()

# Bag keys with meaning to the engine or to sibling schemas.
CONSTRUCTION_ERROR = "construction_error"
DESCRIPTION = "description"
PATTERNS = "patterns"


class Constraint(str, Enum):
    """What the caller receives: the base value, or a Ref holding it."""

    VALUE = "value"
    REF = "ref"


class SchemaParams(BaseModel):
    """Options every factory accepts. Unknown options are ignored."""

    error: Optional[Callable[..., Optional[str]]] = None
    coerce: bool = False
    description: Optional[str] = None

    model_config = ConfigDict(extra="ignore", arbitrary_types_allowed=True)

    @field_validator("error", mode="before")
    @classmethod
    def normalize_error(cls, v: Any) -> Any:
        return to_error_map(v)


def normalize_params(params: Any = None, **kwargs: Any) -> SchemaParams:
    """Build SchemaParams from the loose forms factories accept.

    ``params`` may be ``None``, a message string (shorthand for
    ``error=``), a mapping, or a SchemaParams. Keyword arguments win over
    the positional form.
    """
    if isinstance(params, SchemaParams):
        data: Dict[str, Any] = params.model_dump()
    elif isinstance(params, str):
        data = {"error": params}
    elif isinstance(params, Mapping):
        data = dict(params)
    elif params is None:
        data = {}
    else:
        raise TypeError(f"unsupported schema params: {type(params).__name__}")
    data.update(kwargs)
    return SchemaParams.model_validate(data)


@dataclass
class SchemaInternals:
    """Everything a schema knows about itself.

    Treat instances as immutable once attached to a schema: modifiers go
    through ``clone()`` and mutate the copy.
    """

    type: TypeCode
    checks: List[Any] = field(default_factory=list)
    optional: bool = False
    nilable: bool = False
    non_optional: bool = False
    coerce: bool = False
    default_value: Any = UNSET
    default_func: Optional[Callable[[], Any]] = None
    prefault_value: Any = UNSET
    prefault_func: Optional[Callable[[], Any]] = None
    error: Optional[ErrorMap] = None
    bag: Dict[str, Any] = field(default_factory=dict)
    constructor: Optional[Callable[["SchemaInternals"], Any]] = None
    values: Optional[Tuple[Any, ...]] = None
    constraint: Constraint = Constraint.VALUE

    @classmethod
    def from_params(cls, type_code: TypeCode, params: SchemaParams, **fields: Any) -> "SchemaInternals":
        internals = cls(type=type_code, coerce=params.coerce, error=params.error, **fields)
        if params.description is not None:
            internals.bag[DESCRIPTION] = params.description
        return internals

    def clone(self) -> "SchemaInternals":
        return replace(self, checks=list(self.checks), bag=dict(self.bag))

    def add_check(self, check: Any) -> None:
        self.checks.append(check)
        check.on_attach(self)

    def has_default(self) -> bool:
        return self.default_func is not None or self.default_value is not UNSET

    def resolve_default(self) -> Any:
        if self.default_func is not None:
            return self.default_func()
        return self.default_value

    def has_prefault(self) -> bool:
        return self.prefault_func is not None or self.prefault_value is not UNSET

    def resolve_prefault(self) -> Any:
        if self.prefault_func is not None:
            return self.prefault_func()
        return self.prefault_value

    @property
    def construction_error(self) -> Optional[str]:
        return self.bag.get(CONSTRUCTION_ERROR)
