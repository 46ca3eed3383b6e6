# tests/test_outline.py
"""
End-to-end properties of compute_outline: scenarios, idempotence, radius and
sharpness options, clamping, jitter absorption and the union-area check
against shapely and an independent interval sweep.
"""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from borderline.core.error_codes import InvalidInputError, TraceFailure
from borderline.core.geometry import enclosed_area, loops_to_geometry, rectangles_union
from borderline.core.outline import compute_outline, safe_compute_outline
from borderline.core.types import CornerSharpness, CurveTo, LineTo, OutlineConfig, Rectangle


def _sweep_area(rects: list[tuple[float, float, float, float]]) -> float:
    """Union area by vertical strips and merged y-intervals (no shapely)."""
    xs = sorted({v for r in rects for v in (r[0], r[2])})
    total = 0.0
    for x0, x1 in zip(xs, xs[1:]):
        spans = sorted((r[1], r[3]) for r in rects if r[0] <= x0 and r[2] >= x1)
        covered = 0.0
        cur: list[float] | None = None
        for top, bottom in spans:
            if cur is None or top > cur[1]:
                if cur is not None:
                    covered += cur[1] - cur[0]
                cur = [top, bottom]
            else:
                cur[1] = max(cur[1], bottom)
        if cur is not None:
            covered += cur[1] - cur[0]
        total += covered * (x1 - x0)
    return total


def _random_rects(seed: int, n: int = 12, size: int = 20) -> list[tuple[float, float, float, float]]:
    rng = np.random.default_rng(seed)
    out = []
    for _ in range(n):
        x0, y0 = (int(v) for v in rng.integers(0, size, 2))
        w, h = (int(v) for v in rng.integers(1, 8, 2))
        out.append((float(x0), float(y0), float(x0 + w), float(y0 + h)))
    return out


def test_empty_and_degenerate_input_give_no_loops() -> None:
    assert compute_outline([]).is_empty
    assert compute_outline([(0, 0, 0, 10), (5, 5, 9, 5)]).is_empty


def test_non_finite_coordinates_raise() -> None:
    with pytest.raises(InvalidInputError):
        compute_outline([(0, 0, 10, math.nan)])


def test_scenario_single_rectangle() -> None:
    result = compute_outline([Rectangle(0, 0, 40, 20)])
    assert len(result.loops) == 1
    assert result.loops[0].vertices == ((0, 0), (40, 0), (40, 20), (0, 20))
    assert result.loops[0].winding == "outer"


def test_scenario_gap_two_loops() -> None:
    result = compute_outline([(0, 0, 40, 20), (50, 0, 90, 20)])
    assert len(result.loops) == 2
    assert all(len(loop.vertices) == 4 for loop in result.loops)


def test_scenario_shared_edge_one_loop() -> None:
    result = compute_outline([(0, 0, 50, 20), (0, 20, 50, 40)])
    assert len(result.loops) == 1
    assert len(result.loops[0].vertices) == 6
    assert loops_to_geometry(result).equals(rectangles_union([Rectangle(0, 0, 50, 40)]))


def test_disjoint_rectangles_each_get_a_loop() -> None:
    rects = [(0, 0, 10, 10), (20, 5, 30, 15), (0, 20, 10, 30), (40, 0, 50, 50), (15, 40, 25, 45)]
    result = compute_outline(rects)
    assert len(result.loops) == len(rects)
    assert all(len(loop.vertices) == 4 for loop in result.loops)


def test_idempotent() -> None:
    rects = _random_rects(7)
    cfg = OutlineConfig(corner_radius=3.0, skip_small_ledges=True)
    assert compute_outline(rects, cfg) == compute_outline(rects, cfg)


def test_zero_radius_never_curves() -> None:
    result = compute_outline(_random_rects(3), OutlineConfig(corner_radius=0.0))
    cmds = result.commands()
    assert cmds
    assert not any(isinstance(c, CurveTo) for c in cmds)


def test_negative_radius_is_clamped_not_an_error() -> None:
    result = compute_outline([(0, 0, 40, 20)], OutlineConfig(corner_radius=-5.0))
    assert [c.kind for c in result.loops[0].corners] == ["sharp"] * 4


def test_top_left_sharpness_only_affects_that_corner() -> None:
    cfg = OutlineConfig(corner_radius=5.0, corner_sharpness=CornerSharpness(top_left=True))
    result = compute_outline([(0, 0, 40, 20)], cfg)
    cmds = result.commands()
    assert sum(isinstance(c, CurveTo) for c in cmds) == 3
    assert LineTo((0, 0)) in cmds
    assert [c.kind for c in result.loops[0].corners] == ["sharp", "round", "round", "round"]


def test_all_extreme_corners_sharp_on_staircase() -> None:
    cfg = OutlineConfig(
        corner_radius=4.0,
        corner_sharpness=CornerSharpness(True, True, True, True),
    )
    result = compute_outline([(0, 0, 40, 10), (10, 10, 60, 20)], cfg)
    kinds = {c.vertex: c.kind for c in result.loops[0].corners}
    assert kinds == {
        (0, 0): "sharp",
        (40, 0): "sharp",
        (40, 10): "round",
        (60, 10): "round",
        (60, 20): "sharp",
        (10, 20): "sharp",
        (10, 10): "round",
        (0, 10): "round",
    }
    assert result.extreme_corners is not None
    assert result.extreme_corners.bottom_left == (10, 20)
    assert result.bounding is not None
    assert (result.bounding.right, result.bounding.bottom) == (60, 20)


def test_measurement_jitter_is_absorbed() -> None:
    result = compute_outline([(0, 0, 50, 20.0001), (0, 20.0002, 50, 40)])
    assert len(result.loops) == 1
    assert len(result.loops[0].vertices) == 6


def test_ring_has_hole_loop() -> None:
    rects = [(0, 0, 30, 10), (0, 20, 30, 30), (0, 10, 10, 20), (20, 10, 30, 20)]
    result = compute_outline(rects, OutlineConfig(corner_radius=2.0))
    assert [loop.winding for loop in result.loops] == ["outer", "hole"]
    assert enclosed_area(result) == pytest.approx(800.0)
    assert loops_to_geometry(result).area == pytest.approx(800.0)


def test_diagonal_touch_area() -> None:
    result = compute_outline([(0, 0, 10, 10), (10, 10, 20, 20)])
    assert enclosed_area(result) == pytest.approx(200.0)
    assert loops_to_geometry(result).area == pytest.approx(200.0)


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4, 5])
def test_area_matches_union(seed: int) -> None:
    rects = _random_rects(seed)
    result = compute_outline(rects, OutlineConfig(corner_radius=2.0))
    expected = _sweep_area(rects)
    assert enclosed_area(result) == pytest.approx(expected)
    assert rectangles_union([Rectangle(*r) for r in rects]).area == pytest.approx(expected)


def test_safe_compute_outline_keeps_previous(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    previous = compute_outline([(0, 0, 10, 10)])

    def _fail(graph):  # noqa: ARG001
        raise TraceFailure("boom")

    monkeypatch.setattr("borderline.core.outline.trace_loops", _fail)
    with caplog.at_level(logging.WARNING, logger="borderline.core.outline"):
        out = safe_compute_outline([(0, 0, 20, 20)], previous=previous)
    assert out is previous
    assert "boom" in caplog.text


def test_safe_compute_outline_passes_through() -> None:
    out = safe_compute_outline([(0, 0, 10, 10)])
    assert out is not None and len(out.loops) == 1


def test_many_stacked_text_lines_form_one_loop() -> None:
    rng = np.random.default_rng(11)
    rects = []
    for k in range(400):
        left = float(rng.integers(0, 60))
        width = float(rng.integers(200, 800))
        rects.append((left, 25.0 * k, left + width, 25.0 * k + 25.0))
    result = compute_outline(rects)
    assert len(result.loops) == 1
    assert result.loops[0].winding == "outer"
    assert enclosed_area(result) == pytest.approx(_sweep_area(rects))
