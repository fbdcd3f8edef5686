"""Result type for explicit error handling.

Every pipeline step (resolve, download, extract, install) returns either
``Ok(value)`` or ``Err(error)`` instead of raising. Callers branch on the
variant, usually with ``isinstance`` or structural pattern matching:

    match resolver.resolve("restic", "restic", "latest"):
        case Ok(tag):
            print(f"resolved {tag}")
        case Err(error):
            print(f"failed: {error}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

__all__ = ["Ok", "Err", "Result"]

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying a value."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result carrying an error value."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
