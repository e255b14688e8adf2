"""Tests for magnitude normalization and glyph geometry."""

import math

import pytest

from starglyph.geometry import (
    GlyphCenter,
    build_glyph,
    magnitude_scale,
    remap,
    vertex_radius,
)

CENTER = GlyphCenter(100.0, 100.0)


class TestMagnitudeScale:
    def test_uses_largest_absolute_value(self):
        assert magnitude_scale([-10, 0, 10, 5]) == 10
        assert magnitude_scale([-20, 3, 7]) == 20
        assert magnitude_scale([1, 2, 30]) == 30

    def test_all_zero_row(self):
        assert magnitude_scale([0, 0, 0]) == 0

    def test_single_element_row(self):
        assert magnitude_scale([-4.5]) == 4.5

    def test_empty_row_raises(self):
        with pytest.raises(ValueError, match="at least one value"):
            magnitude_scale([])


class TestRemap:
    def test_maps_endpoints(self):
        assert remap(0, 0, 10, 5, 10) == 5
        assert remap(10, 0, 10, 5, 10) == 10

    def test_inverted_target_range(self):
        assert remap(0.5, 0, 1, 100, 0) == 50

    def test_not_clamped(self):
        assert remap(20, 0, 10, 0, 1) == 2


class TestBuildGlyph:
    def test_concrete_row(self):
        glyph = build_glyph([-10, 0, 10, 5], CENTER)
        radii = [vertex_radius(v.value, v.scale) for v in glyph.vertices]
        assert radii == [-50, 0, 50, 25]

        offsets = [(v.offset_x, v.offset_y) for v in glyph.vertices]
        assert offsets[0] == pytest.approx((-50, 0))
        assert offsets[1] == pytest.approx((0, 0))
        # index 2 sits at 180 degrees regardless of its value
        assert offsets[2] == pytest.approx((-50, 0), abs=1e-9)
        assert offsets[3] == pytest.approx((0, -25), abs=1e-9)

    def test_vertex_count_matches_row(self):
        for length in (1, 3, 7, 12):
            glyph = build_glyph(list(range(1, length + 1)), CENTER)
            assert len(glyph.vertices) == length
            assert [v.index for v in glyph.vertices] == list(range(length))

    def test_zero_scale_collapses_to_center(self):
        glyph = build_glyph([0, 0, 0, 0, 0], CENTER)
        assert glyph.scale == 0
        for v in glyph.vertices:
            assert (v.offset_x, v.offset_y) == (0, 0)
            assert v.position == (CENTER.x, CENTER.y)

    def test_scale_invariance(self):
        row = [3, -1, 4, -1, 5, 9]
        base = build_glyph(row, CENTER)
        for k in (0.5, 2, 1000):
            scaled = build_glyph([v * k for v in row], CENTER)
            for a, b in zip(base.vertices, scaled.vertices):
                assert b.offset_x == pytest.approx(a.offset_x)
                assert b.offset_y == pytest.approx(a.offset_y)

    def test_max_magnitude_reaches_max_radius(self):
        glyph = build_glyph([1, 2, 8, -3], CENTER, max_radius=40)
        v = glyph.vertices[2]
        assert math.hypot(v.offset_x, v.offset_y) == pytest.approx(40)

    def test_vertices_reference_center_and_row(self):
        glyph = build_glyph([1, 2, 3], CENTER, row_index=7)
        for v in glyph.vertices:
            assert v.center is CENTER
            assert v.scale == 3
            assert v.row_index == 7

    def test_single_value_row(self):
        glyph = build_glyph([-2], CENTER)
        v = glyph.vertices[0]
        assert (v.offset_x, v.offset_y) == pytest.approx((-50, 0))

    def test_outline_is_closed(self):
        glyph = build_glyph([1, 2, 3, 4], CENTER)
        outline = glyph.outline()
        assert len(outline) == 5
        assert outline[0] == outline[-1]

    def test_empty_row_raises(self):
        with pytest.raises(ValueError):
            build_glyph([], CENTER)

    def test_deterministic(self):
        a = build_glyph([0.3, -0.7, 1.1], CENTER)
        b = build_glyph([0.3, -0.7, 1.1], CENTER)
        assert a == b
