# File: src/dscoverage/result.py
"""
Result type for recoverable failures.

Analysis in dscoverage never aborts a batch because one file is malformed or
a configuration file is missing. Operations that can fail in an expected way
return ``Result[T, E]`` instead of raising, and callers decide how to degrade.

Usage:
    >>> match extract_imports(source, FileKind.MARKUP):
    ...     case Success(edges):
    ...         ...
    ...     case Failure(error):
    ...         logger.warning("skipping %s: %s", path, error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar


T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful result carrying a value of type T."""

    value: T


@dataclass(frozen=True)
class Failure(Generic[E]):
    """A failed result carrying an error of type E."""

    error: E


Result = Success[T] | Failure[E]


__all__ = ["Failure", "Result", "Success"]
