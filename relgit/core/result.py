"""Result type for explicit error handling.

Every release stage returns a Result instead of raising, so the engine can
stop at the first failure and the CLI can map the failure to an exit code.

Usage:
    def check_clean(text: str) -> Result[None, str]:
        if text.strip():
            return Err("working copy is dirty")
        return Ok(None)

    match check_clean(status_text):
        case Ok(_):
            console.success("clean")
        case Err(message):
            console.error(message)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome carrying a value."""

    value: T

    def map_err[F](self, f: Callable[[Any], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed outcome carrying an error payload."""

    error: E

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Transform the carried error, e.g. to lift a ConfigError into a ReleaseError."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
