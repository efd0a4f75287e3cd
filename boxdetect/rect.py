"""Axis-aligned rectangles with intersection and union."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Number = Union[int, float]


@dataclass(frozen=True)
class Rect:
    """A rectangle given by its top-left corner, width and height."""

    x: Number = 0
    y: Number = 0
    width: Number = 0
    height: Number = 0

    def area(self) -> Number:
        """The area ``width * height``."""
        return self.width * self.height

    def empty(self) -> bool:
        """True when either dimension is not positive."""
        return self.width <= 0 or self.height <= 0

    def intersection(self, other: Rect) -> Rect:
        """The overlap of two rectangles; an empty overlap gives ``Rect()``."""
        if self.empty() or other.empty():
            return Rect()
        x_min, x_max = (self, other) if self.x < other.x else (other, self)
        y_min, y_max = (self, other) if self.y < other.y else (other, self)
        if (x_min.x < 0 and x_min.x + x_min.width < x_max.x) or (
            y_min.y < 0 and y_min.y + y_min.height < y_max.y
        ):
            return Rect()
        result = Rect(
            x_max.x,
            y_max.y,
            min(x_min.width - (x_max.x - x_min.x), x_max.width),
            min(y_min.height - (y_max.y - y_min.y), y_max.height),
        )
        return Rect() if result.empty() else result

    def union(self, other: Rect) -> Rect:
        """The smallest rectangle holding both; empty operands are ignored."""
        if self.empty():
            return other
        if other.empty():
            return self
        x1 = min(self.x, other.x)
        y1 = min(self.y, other.y)
        return Rect(
            x1,
            y1,
            max(self.x + self.width, other.x + other.width) - x1,
            max(self.y + self.height, other.y + other.height) - y1,
        )

    def __and__(self, other: object) -> Rect:
        if not isinstance(other, Rect):
            return NotImplemented
        return self.intersection(other)

    def __or__(self, other: object) -> Rect:
        if not isinstance(other, Rect):
            return NotImplemented
        return self.union(other)