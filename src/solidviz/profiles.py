"""Cross-section profile shapes.

A profile maps a half-width ``h`` to a planar outline given as canonical
``(in_plane, depth)`` offsets. ``in_plane`` runs along the dependent axis,
centered on the midpoint between the two curves, so the base of every
profile spans ``[-h, h]``; ``depth`` rises out of the graph plane.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import List, Tuple

Offset2 = Tuple[float, float]

DEFAULT_SEMICIRCLE_SEGMENTS = 20


class CrossSectionProfile(Enum):
    """Shape of the solid's cross-section perpendicular to the sweep axis."""

    SQUARE = "square"
    TRIANGLE = "triangle"
    SEMICIRCLE = "semicircle"

    @classmethod
    def parse(cls, value) -> "CrossSectionProfile":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(p.value for p in cls)
            raise ValueError(f"profile must be one of {names}, got {value!r}") from None

    def outline(self, half_width: float,
                segments: int = DEFAULT_SEMICIRCLE_SEGMENTS) -> List[Offset2]:
        """Return the profile's vertices for base half-width ``half_width``."""
        if self is CrossSectionProfile.SQUARE:
            return square_outline(half_width)
        if self is CrossSectionProfile.TRIANGLE:
            return triangle_outline(half_width)
        return semicircle_outline(half_width, segments)


def square_outline(h: float) -> List[Offset2]:
    """Square of side ``2h`` standing on its base."""
    return [(h, 0.0), (-h, 0.0), (-h, 2.0 * h), (h, 2.0 * h)]


def triangle_outline(h: float) -> List[Offset2]:
    """Equilateral triangle of side ``2h`` standing on its base."""
    return [(h, 0.0), (-h, 0.0), (0.0, math.sqrt(3.0) * h)]


def semicircle_outline(h: float, segments: int = DEFAULT_SEMICIRCLE_SEGMENTS) -> List[Offset2]:
    """Half disc of radius ``h`` on its diameter.

    The arc is sampled at ``segments`` equal angular steps from 0 to 180
    degrees, giving ``segments + 1`` vertices. The first and last vertices
    are the diameter endpoints, so the closing edge is the diameter.
    """
    if segments < 1:
        raise ValueError("semicircle needs at least one segment")
    outline = []
    for i in range(segments + 1):
        if i == 0:
            c, s = 1.0, 0.0
        elif i == segments:
            c, s = -1.0, 0.0
        else:
            theta = math.pi * i / segments
            c, s = math.cos(theta), math.sin(theta)
        outline.append((h * c, h * s))
    return outline
