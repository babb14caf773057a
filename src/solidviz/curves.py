"""Uniform sampling of ``y = f(x)`` (or ``x = f(y)``) into polylines."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np

from solidviz.expr import try_compile
from solidviz.geometry import Orientation, Segment, Vec2, to_plane

logger = logging.getLogger(__name__)

DEFAULT_DOMAIN = (-60.0, 60.0)
DEFAULT_SAMPLE_COUNT = 2000


@dataclass(frozen=True)
class Polyline:
    """Ordered 2D points in world ``(x, y)`` sharing one orientation.

    Points where the formula evaluated to NaN or an infinity are kept;
    discarding them is up to whoever draws the line.
    """

    orientation: Orientation
    points: Tuple[Vec2, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Vec2]:
        return iter(self.points)

    def __getitem__(self, index):
        return self.points[index]

    def swapped(self) -> "Polyline":
        """The same curve with the coordinate axes exchanged."""
        other = Orientation.Y if self.orientation is Orientation.X else Orientation.X
        return Polyline(other, tuple((p[1], p[0]) for p in self.points))

    def segments(self, z: float = 0.0) -> List[Segment]:
        """Consecutive point pairs as 3D segments lying in the plane ``z``."""
        return [
            Segment((a[0], a[1], z), (b[0], b[1], z))
            for a, b in zip(self.points, self.points[1:])
        ]


def sample_curve(formula: str, orientation, domain=DEFAULT_DOMAIN,
                 sample_count: int = DEFAULT_SAMPLE_COUNT) -> Polyline:
    """
    Sample ``formula`` at ``sample_count`` evenly spaced values across ``domain``.

    Both ends of the domain are sampled. Under ``x`` orientation points are
    ``(v, f(v))``; under ``y`` orientation they are ``(f(v), v)``. An invalid
    formula or unusable domain gives an empty polyline.
    """
    orientation = Orientation.parse(orientation)
    lo, hi = float(domain[0]), float(domain[1])

    if sample_count < 1 or not (math.isfinite(lo) and math.isfinite(hi)) or lo > hi:
        logger.warning("cannot sample %r: domain %s with %d samples", formula, domain, sample_count)
        return Polyline(orientation)

    func = try_compile(formula, orientation)
    if func is None:
        return Polyline(orientation)

    values = np.linspace(lo, hi, int(sample_count))
    results = func(values)
    points = tuple(to_plane(orientation, u, v) for u, v in zip(values, results))
    logger.debug("sampled %r at %d points", formula, len(points))
    return Polyline(orientation, points)


def axis_segments(width: float = 120.0, height: float = 120.0,
                  splits: int = 100) -> List[Segment]:
    """Return the x and y coordinate axes, each broken into ``splits`` segments."""
    segments = []
    x_inc = width / splits
    y_inc = height / splits
    for i in range(splits):
        x0 = -width / 2 + x_inc * i
        segments.append(Segment((x0, 0.0, 0.0), (x0 + x_inc, 0.0, 0.0)))
    for i in range(splits):
        y0 = -height / 2 + y_inc * i
        segments.append(Segment((0.0, y0, 0.0), (0.0, y0 + y_inc, 0.0)))
    return segments
