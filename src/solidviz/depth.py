"""Back-to-front ordering of translucent polygons (painter's algorithm)."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from solidviz.geometry import Orientation, Polygon, distance3


def camera_distance(polygon: Polygon, camera_position: Sequence[float], orientation) -> float:
    """Distance from the camera to the polygon's anchor projected onto the sweep axis.

    Only the anchor coordinate along the sweep direction is kept; the
    other two are zeroed before measuring.
    """
    axis = Orientation.parse(orientation).axis
    projected = [0.0, 0.0, 0.0]
    projected[axis] = polygon.anchor[axis]
    return distance3(projected, camera_position)


def sort_by_camera_distance(polygons: Iterable[Polygon], camera_position: Sequence[float],
                            orientation) -> List[Polygon]:
    """Return ``polygons`` farthest-first from ``camera_position``.

    Call again whenever the camera moves or the orientation changes.
    """
    orientation = Orientation.parse(orientation)
    return sorted(
        polygons,
        key=lambda poly: camera_distance(poly, camera_position, orientation),
        reverse=True,
    )
