"""Small geometry helpers shared by the simulation and the renderer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

VectorLike = Union["Vec2", Tuple[float, float]]


@dataclass(frozen=True)
class Vec2:
    """An immutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: VectorLike) -> Vec2:
        ox, oy = other
        return Vec2(self.x + ox, self.y + oy)

    __radd__ = __add__

    def __sub__(self, other: VectorLike) -> Vec2:
        ox, oy = other
        return Vec2(self.x - ox, self.y - oy)

    def __rsub__(self, other: VectorLike) -> Vec2:
        ox, oy = other
        return Vec2(ox - self.x, oy - self.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vec2:
        return Vec2(self.x / divisor, self.y / divisor)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def length(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y

    def normalized(self) -> Vec2:
        """Unit vector in the same direction; a zero vector cannot be normalised."""
        length = self.length()
        if length == 0.0:
            raise ValueError("cannot normalise a zero vector")
        return Vec2(self.x / length, self.y / length)

    def perpendicular(self) -> Vec2:
        """The vector rotated a quarter turn counter-clockwise: (-y, x)."""
        return Vec2(-self.y, self.x)

    def dot(self, other: VectorLike) -> float:
        """Dot product with another vector."""
        ox, oy = other
        return self.x * ox + self.y * oy


def is_visible(
    position: VectorLike,
    radius: float,
    view_center: VectorLike,
    view_size: VectorLike,
) -> bool:
    """Whether a circle overlaps the rectangle of a view (edges included)."""
    px, py = position
    cx, cy = view_center
    width, height = view_size

    left = cx - width / 2
    right = cx + width / 2
    top = cy - height / 2
    bottom = cy + height / 2

    return (
        px + radius >= left
        and px - radius <= right
        and py + radius >= top
        and py - radius <= bottom
    )