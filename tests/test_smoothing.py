# tests/test_smoothing.py
"""
Deterministic tests for corner rounding: clamped radii, control placement,
sharp overrides and ledge bridging.
"""

from __future__ import annotations

import math

import pytest

from borderline.core.smoothing import (
    corner_groups,
    round_corner,
    smooth_loop,
    turning_vertices,
)
from borderline.core.types import OutlineConfig

RECT = ((0, 0), (40, 0), (40, 20), (0, 20))
# 100x40 block over a 104x40 block: 4-unit ledge on the right, collinear vertex at (0, 40)
NOTCH = ((0, 0), (100, 0), (100, 40), (104, 40), (104, 80), (0, 80), (0, 40))


def test_turning_vertices_drop_collinear() -> None:
    loop = ((0, 0), (50, 0), (50, 20), (50, 40), (0, 40), (0, 20))
    assert turning_vertices(loop) == [(0, 0), (50, 0), (50, 40), (0, 40)]


def test_round_corner_anchor_and_control_points() -> None:
    corner = round_corner((0, 20), (0, 0), (40, 0), radius=5.0, ratio=0.5)
    assert corner.kind == "round"
    assert corner.start_anchor == pytest.approx((0, 5))
    assert corner.end_anchor == pytest.approx((5, 0))
    assert corner.control1 == pytest.approx((0, 2.5))
    assert corner.control2 == pytest.approx((2.5, 0))
    assert corner.incoming == ((0, 20), (0, 0))
    assert corner.outgoing == ((0, 0), (40, 0))


def test_radius_clamped_to_half_edge() -> None:
    corners = smooth_loop(((0, 0), (40, 0), (40, 6), (0, 6)), OutlineConfig(corner_radius=20.0))
    first = corners[0]
    assert first.radius_in == pytest.approx(3.0)
    assert first.radius_out == pytest.approx(20.0)
    assert first.start_anchor == pytest.approx((0, 3))


def test_all_round_by_default() -> None:
    corners = smooth_loop(RECT, OutlineConfig(corner_radius=5.0))
    assert [c.kind for c in corners] == ["round"] * 4
    assert [c.vertex for c in corners] == list(RECT)


def test_zero_radius_makes_every_corner_sharp() -> None:
    corners = smooth_loop(RECT, OutlineConfig(corner_radius=0.0))
    assert [c.kind for c in corners] == ["sharp"] * 4
    assert all(c.control1 is None and c.control2 is None for c in corners)
    assert all(c.start_anchor == c.end_anchor == c.vertex for c in corners)


def test_sharp_points_override_only_that_corner() -> None:
    corners = smooth_loop(RECT, OutlineConfig(corner_radius=5.0), sharp=frozenset({(40, 20)}))
    assert [c.kind for c in corners] == ["round", "round", "sharp", "round"]


def test_corner_groups() -> None:
    assert corner_groups([False] * 4) == [[0], [1], [2], [3]]
    assert corner_groups([False, True, False, False]) == [[0], [1, 2], [3]]
    assert corner_groups([True, False, False, True]) == [[2], [3, 0, 1]]
    assert corner_groups([True] * 4) == [[0], [1], [2], [3]]
    assert corner_groups([True, True, True, False]) == [[0], [1], [2], [3]]


def test_short_edge_rounds_with_clamp_when_ledges_kept() -> None:
    corners = smooth_loop(NOTCH, OutlineConfig(corner_radius=10.0, skip_small_ledges=False))
    assert [c.kind for c in corners] == ["round"] * 6
    at_ledge = corners[2]
    assert at_ledge.vertex == (100, 40)
    assert at_ledge.radius_in == pytest.approx(10.0)
    assert at_ledge.radius_out == pytest.approx(2.0)


def test_short_edge_bridged_by_ledge_curve() -> None:
    corners = smooth_loop(
        NOTCH,
        OutlineConfig(corner_radius=10.0, control_ratio=0.5, skip_small_ledges=True),
    )
    assert [c.kind for c in corners] == ["round", "round", "ledge", "round", "round"]
    ledge = corners[2]
    assert ledge.vertices == ((100, 40), (104, 40))
    assert ledge.start_anchor == pytest.approx((100, 30))
    assert ledge.end_anchor == pytest.approx((104, 50))
    span = 0.5 * math.hypot(4, 20)
    assert ledge.control1 == pytest.approx((100, 30 + span))
    assert ledge.control2 == pytest.approx((104, 50 - span))


def test_ledge_not_formed_next_to_sharp_corner() -> None:
    loop = ((0, 0), (4, 0), (4, 30), (40, 30), (40, 60), (0, 60))
    cfg = OutlineConfig(corner_radius=10.0, skip_small_ledges=True)
    assert [c.kind for c in smooth_loop(loop, cfg)].count("ledge") == 1
    corners = smooth_loop(loop, cfg, sharp=frozenset({(0, 0)}))
    assert "ledge" not in [c.kind for c in corners]
    assert corners[0].kind == "sharp"


def test_degenerate_loop_has_no_corners() -> None:
    assert smooth_loop(((0, 0), (10, 0)), OutlineConfig()) == ()
