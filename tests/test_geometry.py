# tests/test_geometry.py
"""
Deterministic tests for geometry: shoelace area, winding, ensure_polygon,
union oracle and outline-to-shapely conversion.
"""

from __future__ import annotations

import pytest
from shapely.geometry import Polygon

from borderline.core.geometry import (
    ensure_polygon,
    loop_winding,
    loops_to_geometry,
    polygon_bounds,
    rectangles_union,
    signed_area,
)
from borderline.core.outline import compute_outline
from borderline.core.types import OutlineResult, Rectangle


def test_signed_area_clockwise_on_screen_is_positive() -> None:
    cw = [(0, 0), (10, 0), (10, 5), (0, 5)]
    assert signed_area(cw) == pytest.approx(50.0)
    assert signed_area(list(reversed(cw))) == pytest.approx(-50.0)
    assert signed_area([(0, 0), (1, 1)]) == 0.0


def test_loop_winding() -> None:
    assert loop_winding([(0, 0), (10, 0), (10, 5), (0, 5)]) == "outer"
    assert loop_winding([(0, 0), (0, 5), (10, 5), (10, 0)]) == "hole"


def test_ensure_polygon_polygon() -> None:
    p = Polygon([(0, 0), (2, 0), (2, 2), (0, 2)])
    out = ensure_polygon(p)
    assert out.geom_type == "Polygon"
    assert out.area == 4.0


def test_ensure_polygon_empty() -> None:
    assert ensure_polygon(Polygon()).is_empty


def test_ensure_polygon_self_touching_loop_is_repaired() -> None:
    p = Polygon([(0, 0), (10, 0), (10, 10), (20, 10), (20, 20), (10, 20), (10, 10), (0, 10)])
    out = ensure_polygon(p)
    assert out.is_valid
    assert out.area == pytest.approx(200.0)


def test_rectangles_union() -> None:
    union = rectangles_union([Rectangle(0, 0, 20, 20), Rectangle(10, 10, 30, 30)])
    assert union.area == pytest.approx(700.0)
    assert polygon_bounds(union) == (0.0, 0.0, 30.0, 30.0)
    assert rectangles_union([]).is_empty


def test_loops_to_geometry_subtracts_holes() -> None:
    rects = [(0, 0, 30, 10), (0, 20, 30, 30), (0, 10, 10, 20), (20, 10, 30, 20)]
    geom = loops_to_geometry(compute_outline(rects))
    assert geom.area == pytest.approx(800.0)
    assert geom.symmetric_difference(rectangles_union([Rectangle(*r) for r in rects])).area == pytest.approx(0.0)


def test_loops_to_geometry_empty() -> None:
    assert loops_to_geometry(OutlineResult()).is_empty
    assert polygon_bounds(Polygon()) == (0.0, 0.0, 0.0, 0.0)
