"""Solid of revolution between two curves.

Each boundary curve is swept around a rotation axis parallel to the sweep
direction, sitting at ``axis_value`` on the dependent axis. Sampling
produces one rectangular grid per curve, indexed ``[axial row, angular
column]``. Angular columns run from 0 to 360 degrees inclusive, so the
last column repeats the first exactly and closes the seam; lateral and
cap quads both rely on that convention.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import numpy as np

from solidviz.expr import Formula, try_compile
from solidviz.geometry import Orientation, Polygon, Vec3, to_world

logger = logging.getLogger(__name__)

DEFAULT_AXIAL_STEP = 0.3
DEFAULT_ANGULAR_STEPS = 30
MAX_AXIAL_ROWS = 10000

TriangleVerts = Tuple[Vec3, Vec3, Vec3]


@dataclass(frozen=True, eq=False)
class RevolutionMesh:
    """Grid of world points swept by one boundary curve.

    ``grid`` has shape ``(rows, cols, 3)``; ``radii`` holds each row's
    signed distance from the rotation axis.
    """

    axial_values: np.ndarray = field(repr=False)
    angles: np.ndarray = field(repr=False)
    radii: np.ndarray = field(repr=False)
    grid: np.ndarray = field(repr=False)

    @property
    def rows(self) -> int:
        return self.grid.shape[0]

    @property
    def cols(self) -> int:
        return self.grid.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.grid.shape[0], self.grid.shape[1]

    def point(self, row: int, col: int) -> Vec3:
        x, y, z = self.grid[row, col]
        return (float(x), float(y), float(z))


@dataclass(frozen=True)
class RevolutionSolid:
    """Both swept grids plus the quads derived from them."""

    mesh1: Optional[RevolutionMesh] = None
    mesh2: Optional[RevolutionMesh] = None
    side_quads: Tuple[Polygon, ...] = ()
    cap_quads: Tuple[Polygon, ...] = ()

    @property
    def quads(self) -> Tuple[Polygon, ...]:
        return self.side_quads + self.cap_quads

    def is_empty(self) -> bool:
        return not self.side_quads and not self.cap_quads

    def triangles(self) -> Iterator[TriangleVerts]:
        """Split every quad into two triangles sharing its first vertex."""
        for quad in self.quads:
            p0, p1, p2, p3 = quad.points
            yield (p0, p1, p2)
            yield (p0, p2, p3)


def axial_samples(start: float, end: float, step: float) -> np.ndarray:
    """Evenly spaced values from ``start`` to ``end`` inclusive, at most ``step`` apart.

    Returns an empty array for a non-positive step, an empty interval or
    more than ``MAX_AXIAL_ROWS`` rows.
    """
    if not all(math.isfinite(v) for v in (start, end, step)) or step <= 0 or start >= end:
        return np.empty(0)
    steps = (end - start) / step - 1e-9
    if not math.isfinite(steps) or steps >= MAX_AXIAL_ROWS:
        logger.warning("axial step %r over [%r, %r] needs more than %d rows",
                       step, start, end, MAX_AXIAL_ROWS)
        return np.empty(0)
    count = max(1, int(math.ceil(steps)))
    return np.linspace(start, end, count + 1)


def angular_samples(steps: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Angles 0..2*pi inclusive with their cosines and sines.

    The seam columns use exact values so the first and last columns coincide.
    """
    angles = np.linspace(0.0, 2.0 * math.pi, steps + 1)
    cos_t = np.cos(angles)
    sin_t = np.sin(angles)
    cos_t[0] = cos_t[-1] = 1.0
    sin_t[0] = sin_t[-1] = 0.0
    return angles, cos_t, sin_t


def sweep(func: Formula, orientation: Orientation, values: np.ndarray,
          axis_value: float, angular_steps: int) -> RevolutionMesh:
    """Sweep ``func`` over ``values`` around the axis at ``axis_value``."""
    angles, cos_t, sin_t = angular_samples(angular_steps)
    shape = (len(values), len(angles))
    u = np.broadcast_to(values[:, None], shape)
    # Infinite radii times a zero sine are NaN; they pass through as data
    with np.errstate(all="ignore"):
        radii = func(values) - axis_value
        v = axis_value + radii[:, None] * cos_t[None, :]
        w = radii[:, None] * sin_t[None, :]
    if orientation is Orientation.X:
        grid = np.stack([u, v, w], axis=-1)
    else:
        grid = np.stack([v, u, w], axis=-1)

    return RevolutionMesh(axial_values=values, angles=angles, radii=radii, grid=grid)


def _quad(anchor: Vec3, corners) -> Polygon:
    offsets = tuple(
        (float(c[0]) - anchor[0], float(c[1]) - anchor[1], float(c[2]) - anchor[2])
        for c in corners
    )
    return Polygon(anchor, offsets)


def lateral_quads(mesh: RevolutionMesh, orientation: Orientation,
                  axis_value: float) -> List[Polygon]:
    """One quad per pair of adjacent rows and adjacent columns."""
    grid = mesh.grid
    vals = mesh.axial_values
    quads = []
    for i in range(mesh.rows - 1):
        anchor = to_world(orientation, (vals[i] + vals[i + 1]) / 2.0, axis_value, 0.0)
        for j in range(mesh.cols - 1):
            quads.append(_quad(anchor, (grid[i, j], grid[i, j + 1],
                                        grid[i + 1, j + 1], grid[i + 1, j])))
    return quads


def cap_quads(mesh1: RevolutionMesh, mesh2: RevolutionMesh, orientation: Orientation,
              axis_value: float) -> List[Polygon]:
    """Quads joining the two grids across the first and last rows."""
    quads = []
    for row in (0, mesh1.rows - 1):
        anchor = to_world(orientation, mesh1.axial_values[row], axis_value, 0.0)
        g1 = mesh1.grid[row]
        g2 = mesh2.grid[row]
        for j in range(mesh1.cols - 1):
            quads.append(_quad(anchor, (g1[j], g1[j + 1], g2[j + 1], g2[j])))
    return quads


def build_revolution_mesh(f1: str, f2: str, orientation, start: float, end: float,
                          axis_value: float, axial_step: float = DEFAULT_AXIAL_STEP,
                          angular_steps: int = DEFAULT_ANGULAR_STEPS) -> RevolutionSolid:
    """
    Revolve the region between ``f1`` and ``f2`` over ``[start, end]``.

    Returns the two swept grids with ``(rows - 1) * angular_steps`` side
    quads per curve and ``2 * angular_steps`` cap quads. Invalid formulas,
    an empty interval, a non-positive step or a step too fine for
    ``MAX_AXIAL_ROWS`` give an empty solid.
    """
    orientation = Orientation.parse(orientation)
    if angular_steps < 3:
        raise ValueError("a revolution needs at least three angular steps")

    values = axial_samples(start, end, axial_step)
    if not len(values) or not math.isfinite(axis_value):
        logger.warning("cannot revolve over [%r, %r] with step %r about %r",
                       start, end, axial_step, axis_value)
        return RevolutionSolid()

    func1 = try_compile(f1, orientation)
    func2 = try_compile(f2, orientation)
    if func1 is None or func2 is None:
        return RevolutionSolid()

    mesh1 = sweep(func1, orientation, values, axis_value, angular_steps)
    mesh2 = sweep(func2, orientation, values, axis_value, angular_steps)
    assert mesh1.shape == mesh2.shape == (len(values), angular_steps + 1), \
        f"revolution grids disagree: {mesh1.shape} vs {mesh2.shape}"

    sides = lateral_quads(mesh1, orientation, axis_value) + lateral_quads(mesh2, orientation, axis_value)
    caps = cap_quads(mesh1, mesh2, orientation, axis_value)
    logger.debug("revolution mesh %dx%d: %d side quads, %d cap quads",
                 mesh1.rows, mesh1.cols, len(sides), len(caps))
    return RevolutionSolid(mesh1=mesh1, mesh2=mesh2,
                           side_quads=tuple(sides), cap_quads=tuple(caps))
