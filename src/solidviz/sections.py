"""Cross-sections of the region between two curves, swept along an interval."""

from __future__ import annotations

import logging
import math
from typing import List

from solidviz.expr import try_compile
from solidviz.geometry import Orientation, Polygon, to_world
from solidviz.profiles import CrossSectionProfile, DEFAULT_SEMICIRCLE_SEGMENTS

logger = logging.getLogger(__name__)

# One cross-section polygon; the renderer sees the same type for mesh quads
CrossSectionPolygon = Polygon


def interval_values(start: float, end: float, step: float) -> List[float]:
    """Values ``start, start + step, ...`` strictly below ``end``.

    The step is accumulated, not multiplied, so the last value may fall
    short of ``end`` by floating point drift. Non-positive or non-finite
    parameters give an empty list, as does a step too small to change
    ``val`` at its magnitude.
    """
    if not all(math.isfinite(v) for v in (start, end, step)) or step <= 0:
        return []
    values = []
    val = start
    while val < end:
        values.append(val)
        nxt = val + step
        if nxt <= val:
            logger.warning("step %r is below the float resolution at %r", step, val)
            return []
        val = nxt
    return values


def cross_section(f1_val: float, f2_val: float, val: float, orientation: Orientation,
                  profile: CrossSectionProfile,
                  semicircle_segments: int = DEFAULT_SEMICIRCLE_SEGMENTS) -> Polygon:
    """Build the polygon for one sample given both function values at ``val``.

    The profile's base spans the gap between the curves and is centered
    on their midpoint; a zero gap gives a zero-area polygon.
    """
    diff = abs(f1_val - f2_val)
    pos = (f1_val + f2_val) / 2.0
    outline = profile.outline(diff / 2.0, semicircle_segments)
    anchor = to_world(orientation, val, pos, 0.0)
    offsets = tuple(to_world(orientation, 0.0, a, b) for a, b in outline)
    return Polygon(anchor, offsets)


def build_cross_sections(f1: str, f2: str, orientation, start: float, end: float,
                         step: float, profile,
                         semicircle_segments: int = DEFAULT_SEMICIRCLE_SEGMENTS) -> List[Polygon]:
    """
    Return one cross-section polygon per sample of ``[start, end)``.

    Each polygon lies in the plane perpendicular to the sweep axis at its
    sample value. Invalid formulas or a bad interval/step give an empty list.
    """
    orientation = Orientation.parse(orientation)
    profile = CrossSectionProfile.parse(profile)

    if not all(math.isfinite(v) for v in (start, end, step)) or step <= 0 or start >= end:
        logger.warning("cannot build cross-sections over [%r, %r) with step %r",
                       start, end, step)
        return []

    func1 = try_compile(f1, orientation)
    func2 = try_compile(f2, orientation)
    if func1 is None or func2 is None:
        return []

    polygons = []
    for val in interval_values(start, end, step):
        polygons.append(cross_section(func1(val), func2(val), val, orientation,
                                      profile, semicircle_segments))

    logger.debug("built %d %s cross-sections over [%g, %g)",
                 len(polygons), profile.value, start, end)
    return polygons
