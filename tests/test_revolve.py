"""
Tests for the revolution mesh builder.
"""

import math

import numpy as np
import pytest

import solidviz.revolve as revolve
from solidviz.geometry import Orientation
from solidviz.revolve import (
    MAX_AXIAL_ROWS, RevolutionSolid, angular_samples, axial_samples, build_revolution_mesh,
)


class TestSampling:

    def test_axial_inclusive(self):
        values = axial_samples(0.0, 3.0, 0.5)
        np.testing.assert_allclose(values, [0.0, 0.5, 1.0, 1.5, 2.0, 2.5, 3.0])

    def test_axial_spacing_at_most_step(self):
        values = axial_samples(-2.0, 3.0, 0.3)
        assert values[0] == -2.0
        assert values[-1] == 3.0
        assert np.all(np.diff(values) <= 0.3 + 1e-12)

    def test_axial_no_extra_row_from_rounding(self):
        """(3 - 0) / 0.3 is a hair over 10 in floating point."""
        assert len(axial_samples(0.0, 3.0, 0.3)) == 11

    @pytest.mark.parametrize("start,end,step", [
        (0.0, 1.0, 0.0), (0.0, 1.0, -1.0), (1.0, 1.0, 0.1), (2.0, 1.0, 0.1),
    ])
    def test_axial_empty(self, start, end, step):
        assert len(axial_samples(start, end, step)) == 0

    @pytest.mark.parametrize("step", [1e-300, 1e-9])
    def test_axial_too_many_rows(self, step, caplog):
        """A step too fine for the row limit gives no rows instead of a huge array."""
        with caplog.at_level("WARNING", logger="solidviz"):
            assert len(axial_samples(0.0, 1.0, step)) == 0
        assert "rows" in caplog.text

    def test_axial_row_limit(self):
        values = axial_samples(0.0, 1.0, 1.0 / (MAX_AXIAL_ROWS - 1))
        assert 1 < len(values) <= MAX_AXIAL_ROWS + 1

    def test_angular_seam(self):
        angles, cos_t, sin_t = angular_samples(30)
        assert len(angles) == 31
        assert cos_t[0] == cos_t[-1] == 1.0
        assert sin_t[0] == sin_t[-1] == 0.0


class TestBuildRevolutionMesh:

    def build(self, f1="1", f2="2", orientation="x", start=0.0, end=3.0, axis=0.0,
              step=0.5, steps=30):
        return build_revolution_mesh(f1, f2, orientation, start, end, axis,
                                     axial_step=step, angular_steps=steps)

    def test_grid_shapes_match(self):
        solid = self.build()
        assert solid.mesh1.shape == solid.mesh2.shape == (7, 31)
        assert solid.mesh1.grid.shape == (7, 31, 3)

    def test_quad_counts(self):
        """(rows - 1) * steps side quads per curve, steps per cap."""
        solid = self.build()
        assert len(solid.side_quads) == 2 * 6 * 30
        assert len(solid.cap_quads) == 2 * 30
        assert len(solid.quads) == len(solid.side_quads) + len(solid.cap_quads)
        assert all(len(q) == 4 for q in solid.quads)

    def test_seam_closes(self):
        solid = self.build(f1="x^2 + 1", f2="sin(x) + 3")
        for mesh in (solid.mesh1, solid.mesh2):
            np.testing.assert_array_equal(mesh.grid[:, 0], mesh.grid[:, -1])

    def test_radius_is_constant_per_row(self):
        solid = self.build(f1="2", axis=0.0)
        grid = solid.mesh1.grid
        radii = np.hypot(grid[..., 1], grid[..., 2])
        np.testing.assert_allclose(radii, 2.0)
        np.testing.assert_array_equal(
            grid[..., 0], np.broadcast_to(solid.mesh1.axial_values[:, None], grid.shape[:2]))

    def test_axis_offset(self):
        """Points circle the axis at axis_value."""
        solid = self.build(f1="3", axis=-1.0)
        grid = solid.mesh1.grid
        radii = np.hypot(grid[..., 1] + 1.0, grid[..., 2])
        np.testing.assert_allclose(radii, 4.0)

    def test_quad_anchor_on_axis(self):
        solid = self.build(axis=-1.0)
        first = solid.side_quads[0]
        assert first.anchor == pytest.approx((0.25, -1.0, 0.0))
        assert first.points[0] == pytest.approx(solid.mesh1.point(0, 0))

    def test_caps_join_curves(self):
        solid = self.build()
        cap = solid.cap_quads[0]
        p0, p1, p2, p3 = cap.points
        assert p0 == pytest.approx(solid.mesh1.point(0, 0))
        assert p2 == pytest.approx(solid.mesh2.point(0, 1))
        last = solid.cap_quads[-1]
        assert last.anchor[0] == pytest.approx(3.0)

    def test_y_orientation(self):
        """Sweep along world y; the dependent axis is x."""
        solid = self.build(f1="2", orientation=Orientation.Y, axis=1.0)
        grid = solid.mesh1.grid
        np.testing.assert_array_equal(
            grid[..., 1], np.broadcast_to(solid.mesh1.axial_values[:, None], grid.shape[:2]))
        np.testing.assert_allclose(np.hypot(grid[..., 0] - 1.0, grid[..., 2]), 1.0)
        assert solid.side_quads[0].anchor == pytest.approx((1.0, 0.25, 0.0))

    def test_curve_crossing_axis_is_kept(self):
        """Zero radius rows collapse to points but stay in the grid."""
        solid = self.build(f1="x - 1", start=0.0, end=2.0)
        row = solid.mesh1.grid[2]
        np.testing.assert_allclose(row[:, 1:], 0.0, atol=1e-12)

    def test_triangles(self):
        solid = self.build(steps=4)
        tris = list(solid.triangles())
        assert len(tris) == 2 * len(solid.quads)
        p0, p1, p2, p3 = solid.quads[0].points
        assert tris[0] == (p0, p1, p2)
        assert tris[1] == (p0, p2, p3)

    def test_too_few_angular_steps(self):
        with pytest.raises(ValueError):
            self.build(steps=2)

    @pytest.mark.parametrize("kwargs", [
        {"step": 0.0},
        {"step": -0.3},
        {"start": 3.0, "end": 0.0},
        {"axis": math.inf},
        {"step": 1e-300},
        {"step": 1e-9},
        {"f1": "abs(x)"},
        {"f2": "(x"},
    ])
    def test_empty_solid(self, kwargs):
        solid = self.build(**kwargs)
        assert isinstance(solid, RevolutionSolid)
        assert solid.is_empty()
        assert solid.mesh1 is None

    def test_mismatched_grids_assert(self, monkeypatch):
        real_sweep = revolve.sweep
        calls = []

        def short_sweep(func, orientation, values, axis_value, angular_steps):
            calls.append(func)
            if len(calls) == 2:
                values = values[:-1]
            return real_sweep(func, orientation, values, axis_value, angular_steps)

        monkeypatch.setattr(revolve, "sweep", short_sweep)
        with pytest.raises(AssertionError):
            self.build()
