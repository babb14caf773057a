"""JSON hand-off of scene geometry to an external renderer.

Document layout::

    {
      "schema": "solidviz-scene-v1",
      "config": {...},
      "axes": [[[x, y, z], [x, y, z]], ...],
      "curves": [[[x, y], ...], [[x, y], ...]],
      "cross_sections": [{"anchor": [x, y, z], "offsets": [[x, y, z], ...]}, ...],
      "revolution": {"side_quads": [...], "cap_quads": [...]}
    }

Non-finite coordinates are written as ``null`` so the output stays valid
JSON; the renderer decides what to do with them.
"""

from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Optional, Sequence

from solidviz.geometry import Polygon, Segment

SCHEMA_ID = "solidviz-scene-v1"


def _coord(value: float) -> Optional[float]:
    value = float(value)
    return value if math.isfinite(value) else None


def _vec(vec: Sequence[float]) -> List[Optional[float]]:
    return [_coord(c) for c in vec]


def segment_to_list(segment: Segment) -> List[List[Optional[float]]]:
    return [_vec(segment.start), _vec(segment.end)]


def polygon_to_dict(polygon: Polygon) -> Dict[str, Any]:
    return {
        "anchor": _vec(polygon.anchor),
        "offsets": [_vec(off) for off in polygon.offsets],
    }


def scene_to_dict(scene) -> Dict[str, Any]:
    """Serialize a ``SolidScene`` (whatever collections it currently holds)."""
    curves = []
    if scene.graphs is not None:
        curves = [[_vec(p) for p in scene.graphs.curve1],
                  [_vec(p) for p in scene.graphs.curve2]]
    return {
        "schema": SCHEMA_ID,
        "config": scene.config.to_dict(),
        "axes": [segment_to_list(s) for s in scene.axes],
        "curves": curves,
        "cross_sections": [polygon_to_dict(p) for p in scene.cross_sections],
        "revolution": {
            "side_quads": [polygon_to_dict(q) for q in scene.revolution.side_quads],
            "cap_quads": [polygon_to_dict(q) for q in scene.revolution.cap_quads],
        },
    }


def write_scene_json(scene, path_or_file, *, indent: Optional[int] = None) -> None:
    """Write ``scene_to_dict(scene)`` to a path or an open text stream."""
    data = scene_to_dict(scene)
    if hasattr(path_or_file, 'write'):
        json.dump(data, path_or_file, indent=indent, allow_nan=False)
        return
    with open(path_or_file, 'w', encoding='utf-8') as fp:
        json.dump(data, fp, indent=indent, allow_nan=False)
