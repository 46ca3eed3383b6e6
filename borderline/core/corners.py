# borderline/core/corners.py
"""
Global extreme corners and bounding box of a traced arrangement.
Only the extreme corners can be kept sharp. See: docs/ALGORITHM.md section 4.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from borderline.core.types import Bounding, CornerSharpness, ExtremeCorners, Point


def _vertex_array(loops: Sequence[Sequence[Point]]) -> np.ndarray:
    pts = [p for loop in loops for p in loop]
    if not pts:
        return np.zeros((0, 2))
    return np.array(pts, dtype=float)


def find_extreme_corners(loops: Sequence[Sequence[Point]]) -> ExtremeCorners | None:
    """
    Top row: minimal y, leftmost and rightmost x on it. Bottom row: maximal y,
    likewise. None when there are no vertices.
    """
    xy = _vertex_array(loops)
    if xy.shape[0] == 0:
        return None
    min_y = float(xy[:, 1].min())
    max_y = float(xy[:, 1].max())
    top_xs = xy[xy[:, 1] == min_y, 0]
    bottom_xs = xy[xy[:, 1] == max_y, 0]
    return ExtremeCorners(
        top_left=(float(top_xs.min()), min_y),
        top_right=(float(top_xs.max()), min_y),
        bottom_left=(float(bottom_xs.min()), max_y),
        bottom_right=(float(bottom_xs.max()), max_y),
    )


def find_bounding(loops: Sequence[Sequence[Point]]) -> Bounding | None:
    """Axis-aligned bounds (left, top, right, bottom) of every vertex."""
    xy = _vertex_array(loops)
    if xy.shape[0] == 0:
        return None
    minx, miny = xy.min(axis=0)
    maxx, maxy = xy.max(axis=0)
    return Bounding(float(minx), float(miny), float(maxx), float(maxy))


def sharp_points(extremes: ExtremeCorners | None, sharpness: CornerSharpness) -> frozenset[Point]:
    """Vertices that must stay square for the given sharpness flags."""
    if extremes is None:
        return frozenset()
    flagged = [
        (sharpness.top_left, extremes.top_left),
        (sharpness.top_right, extremes.top_right),
        (sharpness.bottom_left, extremes.bottom_left),
        (sharpness.bottom_right, extremes.bottom_right),
    ]
    return frozenset(p for on, p in flagged if on)
