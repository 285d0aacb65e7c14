"""Reference box used for the ref (pointer-like) constraint."""

from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Ref(Generic[T]):
    """A mutable one-slot box.

    Schemas built with the ref constraint return a Ref. When the caller
    passes a Ref in, the validated value is written back into it and the
    same object comes back out, so ``result is original`` holds.
    """

    __slots__ = ("value", "__weakref__")

    def __init__(self, value: T) -> None:
        self.value = value

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Ref):
            return self.value == other.value
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"
