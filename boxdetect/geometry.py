"""Two-dimensional points and sizes with integer or floating-point coordinates.

A value whose coordinates are all ``int`` behaves as an integer type: results
of arithmetic on it are truncated towards zero, as a plain numeric cast does.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

Number = Union[int, float]


def _is_int(value: Number) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding towards zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _cast(value: Number, integral: bool) -> Number:
    return int(value) if integral else value


def _scale(value: Number, factor: Number, integral: bool) -> Number:
    return _cast(value * factor, integral)


def _divide(value: Number, divisor: Number, integral: bool) -> Number:
    if integral and _is_int(divisor):
        return _trunc_div(value, divisor)
    return _cast(value / divisor, integral)


@dataclass(frozen=True)
class Point:
    """A 2D point given by its ``x`` and ``y`` coordinates."""

    x: Number = 0
    y: Number = 0

    @property
    def integral(self) -> bool:
        """True when both coordinates are integers."""
        return _is_int(self.x) and _is_int(self.y)

    def dot(self, other: Point) -> Number:
        """Dot product, in the coordinate type of this point."""
        return _cast(self.x * other.x + self.y * other.y, self.integral)

    def ddot(self, other: Point) -> float:
        """Dot product computed in double precision."""
        return float(self.x) * float(other.x) + float(self.y) * float(other.y)

    def cross(self, other: Point) -> float:
        """Cross product ``x * other.y - y * other.x``."""
        return float(self.x) * other.y - float(self.y) * other.x

    def to_size(self) -> Size:
        """The size whose width is ``x`` and height is ``y``."""
        return Size(self.x, self.y)

    def _both_integral(self, other: Point) -> bool:
        return self.integral and other.integral

    def __add__(self, other: object) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        integral = self._both_integral(other)
        return Point(_cast(self.x + other.x, integral), _cast(self.y + other.y, integral))

    def __sub__(self, other: object) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        integral = self._both_integral(other)
        return Point(_cast(self.x - other.x, integral), _cast(self.y - other.y, integral))

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    def __mul__(self, factor: object) -> Point:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        integral = self.integral
        return Point(_scale(self.x, factor, integral), _scale(self.y, factor, integral))

    __rmul__ = __mul__

    def __truediv__(self, divisor: object) -> Point:
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        integral = self.integral
        return Point(_divide(self.x, divisor, integral), _divide(self.y, divisor, integral))


@dataclass(frozen=True)
class Size:
    """The width and height of an image or rectangle."""

    width: Number = 0
    height: Number = 0

    @property
    def integral(self) -> bool:
        """True when both dimensions are integers."""
        return _is_int(self.width) and _is_int(self.height)

    def area(self) -> Number:
        """The area ``width * height``."""
        return self.width * self.height

    def aspect_ratio(self) -> float:
        """The ratio ``width / height`` in floating point."""
        if self.height == 0:
            if self.width == 0:
                return math.nan
            return math.copysign(math.inf, self.width)
        return self.width / float(self.height)

    def empty(self) -> bool:
        """True when either dimension is not positive."""
        return self.width <= 0 or self.height <= 0

    def to_point(self) -> Point:
        """The point whose ``x`` is the width and ``y`` the height."""
        return Point(self.width, self.height)

    def __add__(self, other: object) -> Size:
        if not isinstance(other, Size):
            return NotImplemented
        integral = self.integral and other.integral
        return Size(
            _cast(self.width + other.width, integral),
            _cast(self.height + other.height, integral),
        )

    def __sub__(self, other: object) -> Size:
        if not isinstance(other, Size):
            return NotImplemented
        integral = self.integral and other.integral
        return Size(
            _cast(self.width - other.width, integral),
            _cast(self.height - other.height, integral),
        )

    def __mul__(self, factor: object) -> Size:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        integral = self.integral
        return Size(_scale(self.width, factor, integral), _scale(self.height, factor, integral))

    __rmul__ = __mul__

    def __truediv__(self, divisor: object) -> Size:
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        integral = self.integral
        return Size(
            _divide(self.width, divisor, integral),
            _divide(self.height, divisor, integral),
        )


def norm(point: Point) -> float:
    """The Euclidean (L2) norm of a point."""
    return math.sqrt(float(point.x) * point.x + float(point.y) * point.y)