"""Explicit success/failure variants returned by the generation entry points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Success(Generic[T]):
    """A computed value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure(Generic[E]):
    """A recoverable, typed failure the caller is expected to surface."""

    error: E

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure[E]]
