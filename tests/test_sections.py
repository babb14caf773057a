"""
Tests for the cross-section builder.
"""

import math

import pytest

from solidviz.geometry import Orientation
from solidviz.profiles import CrossSectionProfile
from solidviz.sections import build_cross_sections, cross_section, interval_values


def at_value(polygons, axis, value):
    """Pick the polygon whose anchor sits at ``value`` along ``axis``."""
    matches = [p for p in polygons if p.anchor[axis] == pytest.approx(value)]
    assert len(matches) == 1
    return matches[0]


class TestIntervalValues:

    def test_half_open(self):
        """The end of the interval is excluded."""
        assert interval_values(-2.0, 3.0, 0.5) == [
            -2.0, -1.5, -1.0, -0.5, 0.0, 0.5, 1.0, 1.5, 2.0, 2.5,
        ]

    def test_accumulates(self):
        """Values come from repeated addition of the step."""
        values = interval_values(0.0, 1.0, 0.1)
        expected = []
        v = 0.0
        while v < 1.0:
            expected.append(v)
            v += 0.1
        assert values == expected

    @pytest.mark.parametrize("start,end,step", [
        (0.0, 1.0, 0.0),
        (0.0, 1.0, -0.5),
        (0.0, 1.0, math.nan),
        (1.0, 0.0, 0.5),
    ])
    def test_empty(self, start, end, step):
        assert interval_values(start, end, step) == []

    def test_step_below_float_resolution(self, caplog):
        """A step that cannot move the value gives no samples instead of spinning."""
        with caplog.at_level("WARNING", logger="solidviz"):
            assert interval_values(1e17, 1e17 + 64, 1.0) == []
        assert "resolution" in caplog.text

    def test_build_with_step_below_float_resolution(self):
        assert build_cross_sections("x", "x+1", "x", 1e17, 1e17 + 64, 1.0, "square") == []

    def test_large_values_with_usable_step(self):
        """Steps at or above the float spacing still advance."""
        assert len(interval_values(1e17, 1e17 + 64, 16.0)) == 4


class TestBuildCrossSections:
    """Square, triangle and semicircle sections between two curves."""

    def test_square_count(self):
        polygons = build_cross_sections("x+6", "x^2", "x", -2.0, 3.0, 0.5, "square")
        assert len(polygons) == 10
        assert all(len(p) == 4 for p in polygons)

    def test_square_spans_gap(self):
        """At x = 2 the curves are 4 apart, so the half-width is 2."""
        polygons = build_cross_sections("x+6", "x^2", "x", -2.0, 3.0, 0.5, "square")
        poly = at_value(polygons, 0, 2.0)
        assert poly.anchor == (2.0, 6.0, 0.0)
        assert poly.points == (
            (2.0, 8.0, 0.0), (2.0, 4.0, 0.0), (2.0, 4.0, 4.0), (2.0, 8.0, 4.0),
        )

    def test_sections_are_perpendicular_to_sweep(self):
        """Every vertex shares the anchor's sweep coordinate."""
        polygons = build_cross_sections("x+6", "x^2", Orientation.X, -2.0, 3.0, 0.25,
                                        CrossSectionProfile.SEMICIRCLE)
        for poly in polygons:
            assert all(p[0] == poly.anchor[0] for p in poly.points)

    def test_y_orientation(self):
        """Under y orientation the sweep runs along world y."""
        polygons = build_cross_sections("y+6", "y^2", "y", -2.0, 3.0, 0.5, "square")
        poly = at_value(polygons, 1, 2.0)
        assert poly.anchor == (6.0, 2.0, 0.0)
        assert sorted(p[0] for p in poly.points) == [4.0, 4.0, 8.0, 8.0]
        assert all(p[1] == 2.0 for p in poly.points)

    def test_triangle_height(self):
        polygons = build_cross_sections("x+6", "x^2", "x", -2.0, 3.0, 0.5, "triangle")
        poly = at_value(polygons, 0, 2.0)
        assert len(poly) == 3
        assert max(p[2] for p in poly.points) == pytest.approx(2.0 * math.sqrt(3.0))

    def test_semicircle_segments(self):
        polygons = build_cross_sections("x+6", "x^2", "x", -2.0, 3.0, 0.5, "semicircle",
                                        semicircle_segments=10)
        assert all(len(p) == 11 for p in polygons)

    def test_order_of_curves_irrelevant(self):
        a = build_cross_sections("x+6", "x^2", "x", -2.0, 3.0, 0.5, "square")
        b = build_cross_sections("x^2", "x+6", "x", -2.0, 3.0, 0.5, "square")
        assert a == b

    def test_equal_curves_give_zero_area(self):
        polygons = build_cross_sections("x", "x", "x", 0.0, 1.0, 0.5, "square")
        assert len(polygons) == 2
        for poly in polygons:
            assert all(off == (0.0, 0.0, 0.0) for off in poly.offsets)

    def test_non_finite_values_pass_through(self):
        polygons = build_cross_sections("1/x", "0", "x", -1.0, 1.5, 1.0, "square")
        assert len(polygons) == 3
        assert math.isinf(polygons[1].anchor[1])

    @pytest.mark.parametrize("step", [0.0, -0.5])
    def test_bad_step(self, step, caplog):
        with caplog.at_level("WARNING", logger="solidviz"):
            assert build_cross_sections("x+6", "x^2", "x", -2.0, 3.0, step, "square") == []
        assert "cross-sections" in caplog.text

    def test_empty_interval(self):
        assert build_cross_sections("x+6", "x^2", "x", 3.0, -2.0, 0.5, "square") == []

    def test_invalid_formula(self):
        assert build_cross_sections("x^2 + abs(x)", "x", "x", -2.0, 3.0, 0.5, "square") == []

    def test_bad_profile(self):
        with pytest.raises(ValueError):
            build_cross_sections("x", "x^2", "x", -2.0, 3.0, 0.5, "hexagon")


class TestCrossSection:

    def test_single(self):
        poly = cross_section(1.0, 3.0, 0.0, Orientation.X, CrossSectionProfile.SQUARE)
        assert poly.anchor == (0.0, 2.0, 0.0)
        assert poly.offsets[0] == (0.0, 1.0, 0.0)
