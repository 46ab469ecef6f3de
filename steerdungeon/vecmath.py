"""Small 2D vector helpers shared by movement, steering and dungeon code."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Protocol


class _HasXY(Protocol):
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Vec2:
    """An immutable 2D vector of floats (positions, velocities, steering)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass(frozen=True, slots=True)
class IVec2:
    """An immutable 2D vector of integers (grid coordinates)."""

    x: int = 0
    y: int = 0

    def __add__(self, other: IVec2) -> IVec2:
        if not isinstance(other, IVec2):
            return NotImplemented
        return IVec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: IVec2) -> IVec2:
        if not isinstance(other, IVec2):
            return NotImplemented
        return IVec2(self.x - other.x, self.y - other.y)

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y


def safeinv(v: float) -> float:
    """Return 1/v, or v itself when it is too close to zero to invert."""
    return 1.0 / v if abs(v) > 1e-7 else v


def length_sq(v: _HasXY) -> float:
    return v.x * v.x + v.y * v.y


def length(v: _HasXY) -> float:
    return math.sqrt(length_sq(v))


def normalize(v: Vec2) -> Vec2:
    """Scale ``v`` to unit length; a zero vector stays zero."""
    return v * safeinv(length(v))


def truncate(v: Vec2, max_len: float) -> Vec2:
    """Shorten ``v`` to ``max_len`` if it is longer than that."""
    current = length(v)
    if current > max_len:
        return v * (max_len / current)
    return v


def sqr(a):
    return a * a


def dist_sq(lhs: _HasXY, rhs: _HasXY) -> float:
    return float(sqr(lhs.x - rhs.x) + sqr(lhs.y - rhs.y))


def dist(lhs: _HasXY, rhs: _HasXY) -> float:
    return math.sqrt(dist_sq(lhs, rhs))