"""The three geometry collections shown in the 3D view and their rebuild rules.

``SolidScene`` is what a user interface drives: each button or edit maps
to one method, and each method discards the collection it owns and
rebuilds it from the current ``SceneConfig``. Nothing is updated in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from solidviz.config import SceneConfig
from solidviz.curves import Polyline, axis_segments, sample_curve
from solidviz.depth import sort_by_camera_distance
from solidviz.geometry import Polygon, Segment
from solidviz.revolve import RevolutionSolid, build_revolution_mesh
from solidviz.sections import build_cross_sections

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Graphs:
    """The two sampled curves."""

    curve1: Polyline
    curve2: Polyline

    def segments(self) -> List[Segment]:
        return self.curve1.segments() + self.curve2.segments()


class SolidScene:
    """Owns the curve, cross-section and revolution collections.

    Usage:
        scene = SolidScene(SceneConfig(function2="x^3"))
        scene.graph()
        scene.graph_cross_sections()
        back_to_front = scene.sorted_cross_sections(camera_position)
    """

    def __init__(self, config: Optional[SceneConfig] = None):
        self.config = config or SceneConfig()
        self.axes: List[Segment] = axis_segments(
            width=self.config.domain[1] - self.config.domain[0],
            height=self.config.domain[1] - self.config.domain[0],
        )
        self.graphs: Optional[Graphs] = None
        self.cross_sections: List[Polygon] = []
        self.revolution: RevolutionSolid = RevolutionSolid()

    def configure(self, **overrides) -> SceneConfig:
        """Apply parameter changes; callers rebuild whichever collections they need."""
        self.config = self.config.replace(**overrides)
        logger.debug("scene parameters changed: %s", ", ".join(sorted(overrides)))
        return self.config

    def graph(self) -> Graphs:
        """Re-sample both curves. Also clears the cross-sections, which may now be stale."""
        cfg = self.config
        self.clear_cross_sections()
        self.graphs = Graphs(
            curve1=sample_curve(cfg.function1, cfg.orientation, cfg.domain, cfg.sample_count),
            curve2=sample_curve(cfg.function2, cfg.orientation, cfg.domain, cfg.sample_count),
        )
        return self.graphs

    def graph_cross_sections(self) -> List[Polygon]:
        cfg = self.config
        self.cross_sections = build_cross_sections(
            cfg.function1, cfg.function2, cfg.orientation,
            cfg.interval_start, cfg.interval_end, cfg.step, cfg.profile,
            semicircle_segments=cfg.semicircle_segments,
        )
        return self.cross_sections

    def show_rotation(self) -> RevolutionSolid:
        cfg = self.config
        self.revolution = build_revolution_mesh(
            cfg.function1, cfg.function2, cfg.orientation,
            cfg.interval_start, cfg.interval_end, cfg.rotation_axis,
            axial_step=cfg.axial_step, angular_steps=cfg.angular_steps,
        )
        return self.revolution

    def clear_graph(self) -> None:
        self.graphs = None

    def clear_cross_sections(self) -> None:
        self.cross_sections = []

    def clear_rotation(self) -> None:
        self.revolution = RevolutionSolid()

    def sorted_cross_sections(self, camera_position: Optional[Sequence[float]] = None) -> List[Polygon]:
        """Cross-sections farthest-first from the camera (configured position by default)."""
        if camera_position is None:
            camera_position = self.config.camera_position
        return sort_by_camera_distance(self.cross_sections, camera_position, self.config.orientation)

    def sorted_quads(self, camera_position: Optional[Sequence[float]] = None) -> List[Polygon]:
        """Revolution quads farthest-first from the camera."""
        if camera_position is None:
            camera_position = self.config.camera_position
        return sort_by_camera_distance(self.revolution.quads, camera_position, self.config.orientation)
