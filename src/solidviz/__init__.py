# -*- coding: utf-8 -*-
"""Solids of known cross-section and solids of revolution between two curves."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("solidviz")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from solidviz.geometry import Orientation, Polygon, Segment
from solidviz.profiles import CrossSectionProfile
from solidviz.curves import Polyline, sample_curve, axis_segments
from solidviz.sections import build_cross_sections
from solidviz.revolve import RevolutionSolid, build_revolution_mesh
from solidviz.depth import sort_by_camera_distance
from solidviz.config import SceneConfig, load_config
from solidviz.scene import SolidScene

__all__ = [
    "__version__",
    "Orientation",
    "Polygon",
    "Segment",
    "CrossSectionProfile",
    "Polyline",
    "sample_curve",
    "axis_segments",
    "build_cross_sections",
    "RevolutionSolid",
    "build_revolution_mesh",
    "sort_by_camera_distance",
    "SceneConfig",
    "load_config",
    "SolidScene",
]
