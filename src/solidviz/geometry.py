"""Shared geometric types and the canonical-to-world axis transform.

Builders work in a canonical frame ``(u, v, w)``: ``u`` is the independent
value, ``v`` the dependent value and ``w`` the depth out of the graph
plane. ``to_world`` is the only place the orientation swaps axes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]


class Orientation(Enum):
    """Which world axis carries the independent variable."""

    X = "x"
    Y = "y"

    @classmethod
    def parse(cls, value) -> "Orientation":
        """Accept an ``Orientation`` or the letters ``'x'``/``'y'`` (any case)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"orientation must be 'x' or 'y', got {value!r}") from None

    @property
    def axis(self) -> int:
        """Index of the world coordinate that varies along the sweep."""
        return 0 if self is Orientation.X else 1


def to_world(orientation: Orientation, u: float, v: float, w: float = 0.0) -> Vec3:
    """Map canonical ``(independent, dependent, depth)`` to world ``(x, y, z)``."""
    if orientation is Orientation.X:
        return (float(u), float(v), float(w))
    return (float(v), float(u), float(w))


def to_plane(orientation: Orientation, u: float, v: float) -> Vec2:
    """Two-dimensional form of ``to_world`` for points in the graph plane."""
    if orientation is Orientation.X:
        return (float(u), float(v))
    return (float(v), float(u))


def add3(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def distance3(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two points."""
    return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2)


def is_finite3(p: Sequence[float]) -> bool:
    return math.isfinite(p[0]) and math.isfinite(p[1]) and math.isfinite(p[2])


@dataclass(frozen=True)
class Segment:
    """A 3D line segment handed to the renderer."""

    start: Vec3
    end: Vec3

    def is_finite(self) -> bool:
        return is_finite3(self.start) and is_finite3(self.end)


@dataclass(frozen=True)
class Polygon:
    """A positioned planar polygon: an anchor point plus vertex offsets from it."""

    anchor: Vec3
    offsets: Tuple[Vec3, ...]

    @property
    def points(self) -> Tuple[Vec3, ...]:
        """Absolute vertex positions."""
        return tuple(add3(self.anchor, off) for off in self.offsets)

    def __len__(self) -> int:
        return len(self.offsets)


__all__ = [
    "Vec2",
    "Vec3",
    "Orientation",
    "to_world",
    "to_plane",
    "add3",
    "distance3",
    "is_finite3",
    "Segment",
    "Polygon",
]
