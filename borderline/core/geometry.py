# borderline/core/geometry.py
"""
Geometry helpers: loop area and winding, shapely conversion, union oracle.
Screen coordinates (y down): a clockwise loop has positive shoelace area.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
from shapely.geometry import MultiPolygon, Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from borderline.core.types import OutlineResult, Point, Rectangle, Winding


def signed_area(vertices: Sequence[Point]) -> float:
    """Shoelace area; positive for loops that run clockwise on screen."""
    if len(vertices) < 3:
        return 0.0
    xy = np.asarray(vertices, dtype=float)
    x = xy[:, 0]
    y = xy[:, 1]
    return float(0.5 * (np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)))


def loop_winding(vertices: Sequence[Point]) -> Winding:
    """'outer' for clockwise loops, 'hole' for counter-clockwise ones."""
    return "outer" if signed_area(vertices) >= 0 else "hole"


def enclosed_area(result: OutlineResult) -> float:
    """Outer loop areas minus hole loop areas (straight-edged, before rounding)."""
    return float(sum(signed_area(loop.vertices) for loop in result.loops))


def ensure_polygon(geom: BaseGeometry) -> Polygon | MultiPolygon:
    """
    Return geom as Polygon or MultiPolygon; fix invalid with buffer(0).
    Loops that touch themselves at a single vertex come out invalid from shapely.
    """
    if geom is None or geom.is_empty:
        return Polygon()
    if isinstance(geom, (Polygon, MultiPolygon)):
        if not geom.is_valid:
            geom = geom.buffer(0)
        return geom  # type: ignore[return-value]
    if hasattr(geom, "geoms"):
        polys = [ensure_polygon(g) for g in geom.geoms]
        polys = [p for p in polys if p is not None and not p.is_empty]
        if not polys:
            return Polygon()
        return unary_union(polys)  # type: ignore[return-value]
    return Polygon()


def rectangle_to_polygon(rect: Rectangle) -> Polygon:
    return box(rect.left, rect.top, rect.right, rect.bottom)


def rectangles_union(rectangles: Iterable[Rectangle]) -> BaseGeometry:
    """Union of the rectangles via shapely; used as an independent area oracle."""
    polys = [rectangle_to_polygon(r) for r in rectangles]
    if not polys:
        return Polygon()
    return unary_union(polys)


def loops_to_geometry(result: OutlineResult) -> Polygon | MultiPolygon:
    """Outer loops unioned, hole loops subtracted. Straight-edged outline."""
    outers = [ensure_polygon(Polygon(l.vertices)) for l in result.loops if l.winding == "outer"]
    holes = [ensure_polygon(Polygon(l.vertices)) for l in result.loops if l.winding == "hole"]
    if not outers:
        return Polygon()
    geom = unary_union(outers)
    if holes:
        geom = geom.difference(unary_union(holes))
    return ensure_polygon(geom)


def polygon_bounds(geom: BaseGeometry) -> tuple[float, float, float, float]:
    """Return (minx, miny, maxx, maxy)."""
    if geom is None or geom.is_empty:
        return (0.0, 0.0, 0.0, 0.0)
    b = geom.bounds
    return (b[0], b[1], b[2], b[3])
