"""
Result envelope for per-object success/failure handling.

Extraction treats each catalog object as an independent unit of work: one
unreadable table must not abort the run. Instead of nesting try/except in
every extractor loop, reading and rendering an object returns ``Ok[T]`` or
``Err[T]`` and the loop decides what to count and log.

Manifesto:
    - **Explicit over implicit:** A skipped object is a value, not a hidden
      exception
    - **Batch-friendly:** One bad record never aborts the category

Examples:
    >>> from metaspine.core.result import Ok, Err, try_result
    >>> try_result(lambda: int("42")).unwrap()
    42
    >>> try_result(lambda: int("x")).is_err()
    True
    >>> match try_result(lambda: 1 / 0):
    ...     case Ok(value):
    ...         print(value)
    ...     case Err(error):
    ...         print(type(error).__name__)
    ZeroDivisionError

Tags:
    result-pattern, error-handling, functional, metaspine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """Failed result containing the exception that caused it."""

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


def try_result(f: Callable[[], T]) -> Result[T]:
    """
    Execute a zero-argument callable and wrap the outcome.

    Returns Ok with the return value, or Err with the exception if ``f``
    raises. This is the bridge between provider code (which raises) and the
    extractor loops (which count).

    Args:
        f: Zero-argument callable that may raise exceptions

    Returns:
        Ok[T] if f() succeeds, Err[T] with the exception if f() raises
    """
    try:
        return Ok(f())
    except Exception as e:
        return Err(e)


__all__ = ["Ok", "Err", "Result", "try_result"]
