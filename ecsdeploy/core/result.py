"""Result type for explicit error handling.

Every step of a release talks to an external tool that can fail. Instead of
raising, steps return `Ok(value)` or `Err(error)` and the caller decides
whether to abort, warn or continue.

Usage:
    match publish_image(config=config, release_id=release_id, console=console):
        case Ok(image):
            console.success(image.pinned)
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result holding `value`."""

    value: T

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Apply `f` to the contained value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result holding `error`."""

    error: E

    def map(self, f: Callable[[T], U]) -> Err[E]:
        """Return self unchanged; there is no value to map."""
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
