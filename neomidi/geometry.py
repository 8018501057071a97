"""Small two-component value types for positions and sizes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Point(Generic[T]):
    """A position with ``x`` and ``y`` components."""

    x: T = 0  # type: ignore[assignment]
    y: T = 0  # type: ignore[assignment]

    def __iter__(self) -> Iterator[T]:
        yield self.x
        yield self.y

    def __add__(self, other: Point[T]) -> Point[T]:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)  # type: ignore[operator]


@dataclass(frozen=True)
class Size(Generic[T]):
    """A size with width ``w`` and height ``h``."""

    w: T = 0  # type: ignore[assignment]
    h: T = 0  # type: ignore[assignment]

    def __iter__(self) -> Iterator[T]:
        yield self.w
        yield self.h