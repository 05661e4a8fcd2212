"""Plane geometry primitives used by the calibration and tracking code."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Vector2D:
    """An immutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2D) -> Vector2D:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vector2D:
        if isinstance(factor, Vector2D):
            return NotImplemented
        return Vector2D(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, factor: float) -> Vector2D:
        if isinstance(factor, Vector2D):
            return NotImplemented
        return Vector2D(self.x / factor, self.y / factor)


@dataclass(frozen=True)
class Rect2D:
    """An axis-aligned rectangle given by its upper-left and lower-right corners."""

    upper_left: Vector2D = Vector2D(0.0, 0.0)
    lower_right: Vector2D = Vector2D(1.0, 1.0)

    @property
    def width(self) -> float:
        return self.lower_right.x - self.upper_left.x

    @property
    def height(self) -> float:
        return self.lower_right.y - self.upper_left.y


@dataclass
class Blob:
    """A tracked touch: position, motion and size as reported by the tracker."""

    id: int = 0
    centroid: Vector2D = field(default_factory=Vector2D)
    d: Vector2D = field(default_factory=Vector2D)
    maccel: float = 0.0
    width: float = 0.0
    height: float = 0.0
    sitting: float = 0.0
    color: int = 0xFFFFFF


def _cross(origin: Vector2D, a: Vector2D, b: Vector2D) -> float:
    return (a.x - origin.x) * (b.y - origin.y) - (a.y - origin.y) * (b.x - origin.x)


def _same_side(p1: Vector2D, p2: Vector2D, a: Vector2D, b: Vector2D) -> bool:
    """True if p1 and p2 lie on the same side of the line through a and b."""
    return _cross(a, b, p1) * _cross(a, b, p2) >= 0


def is_point_in_triangle(p: Vector2D, a: Vector2D, b: Vector2D, c: Vector2D) -> bool:
    """True if p lies inside triangle abc or on its edges."""
    return _same_side(p, a, b, c) and _same_side(p, b, a, c) and _same_side(p, c, a, b)