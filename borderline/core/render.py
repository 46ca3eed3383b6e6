# borderline/core/render.py
"""
Matplotlib PNG debug overlay: element rectangles, rounded outline, traced
vertices, extreme corners, anchors, control points and ledge-skipped vertices.
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Sequence

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import PathPatch
from matplotlib.path import Path as MplPath

from borderline.core.config import PATH_STROKE, RENDER_HEIGHT_PX, RENDER_WIDTH_PX
from borderline.core.geometry import polygon_bounds, rectangles_union
from borderline.core.types import (
    ClosePath,
    CurveTo,
    LineTo,
    MoveTo,
    OutlineResult,
    Point,
    Rectangle,
)


def outline_to_mpl_path(result: OutlineResult) -> MplPath | None:
    """Convert every loop into one matplotlib Path (CURVE4 for cubic segments)."""
    verts: list[tuple[float, float]] = []
    codes: list[int] = []
    for loop in result.loops:
        start = None
        for cmd in loop.commands:
            if isinstance(cmd, MoveTo):
                start = cmd.point
                verts.append(cmd.point)
                codes.append(MplPath.MOVETO)
            elif isinstance(cmd, LineTo):
                verts.append(cmd.point)
                codes.append(MplPath.LINETO)
            elif isinstance(cmd, CurveTo):
                verts.extend([cmd.control1, cmd.control2, cmd.end])
                codes.extend([MplPath.CURVE4] * 3)
            elif isinstance(cmd, ClosePath):
                verts.append(start if start is not None else (0.0, 0.0))
                codes.append(MplPath.CLOSEPOLY)
    if not verts:
        return None
    return MplPath(np.array(verts, dtype=float), codes)


def _set_axes(ax: plt.Axes, result: OutlineResult, rectangles: Sequence[Rectangle], pad_frac: float) -> None:
    """Screen orientation (y down), equal aspect, margin around content."""
    if result.bounding is not None:
        b = result.bounding
        minx, miny, maxx, maxy = b.left, b.top, b.right, b.bottom
    else:
        minx, miny, maxx, maxy = polygon_bounds(rectangles_union(rectangles))
    dx = max(1.0, (maxx - minx) * pad_frac)
    dy = max(1.0, (maxy - miny) * pad_frac)
    ax.set_xlim(minx - dx, maxx + dx)
    ax.set_ylim(maxy + dy, miny - dy)
    ax.set_aspect("equal", adjustable="box")
    ax.axis("off")


def debug_markers(result: OutlineResult) -> dict[str, tuple[list[Point], dict]]:
    """
    Point sets of the debug overlay keyed by legend label, with scatter style:
    traced vertices, the four extreme corners, anchors, controls and the
    vertices a ledge curve skips.
    """
    corners = [c for loop in result.loops for c in loop.corners]
    extremes = result.extreme_corners
    extreme_points = (
        list(dict.fromkeys([extremes.top_left, extremes.top_right, extremes.bottom_left, extremes.bottom_right]))
        if extremes is not None
        else []
    )
    return {
        "vertices": ([v for loop in result.loops for v in loop.vertices], {"s": 10, "color": "red"}),
        "extreme corners": (extreme_points, {"s": 80, "facecolors": "none", "edgecolors": "red"}),
        "anchors": ([p for c in corners for p in (c.start_anchor, c.end_anchor)], {"s": 8, "color": "green"}),
        "controls": (
            [p for c in corners for p in (c.control1, c.control2) if p is not None],
            {"s": 8, "color": "purple"},
        ),
        "skipped": (
            [v for c in corners if c.kind == "ledge" for v in c.vertices],
            {"s": 40, "marker": "x", "color": "darkorange"},
        ),
    }


def render_debug(
    result: OutlineResult,
    rectangles: Sequence[Rectangle],
    output_path: str | Path,
    width_px: int = RENDER_WIDTH_PX,
    height_px: int = RENDER_HEIGHT_PX,
    scale: int = 1,
) -> None:
    """Render debug overlay. scale multiplies output resolution (1x, 2x, 4x)."""
    w, h = width_px * scale, height_px * scale
    fig = plt.figure(figsize=(w / 100.0, h / 100.0), dpi=100, constrained_layout=False)
    # Leave bottom margin so legend does not overlap the image
    ax = fig.add_axes([0.05, 0.08, 0.9, 0.88])
    ax.axis("off")

    for r in rectangles:
        xy = np.array(list(r.corners()) + [r.corners()[0]])
        ax.plot(xy[:, 0], xy[:, 1], color="lightgray", linewidth=1)

    path = outline_to_mpl_path(result)
    if path is not None:
        ax.add_patch(PathPatch(path, facecolor="none", edgecolor=PATH_STROKE, linewidth=2, label="outline"))

    markers = debug_markers(result)
    for label, (points, style) in markers.items():
        if points:
            xy = np.array(points, dtype=float)
            ax.scatter(xy[:, 0], xy[:, 1], label=label, **style)

    _set_axes(ax, result, rectangles, pad_frac=0.05)
    handles, _ = ax.get_legend_handles_labels()
    extra = []
    if handles:
        # Legend in the reserved bottom margin so it never overlaps the image
        extra.append(ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.02), ncol=4, fontsize=8))
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(output_path, dpi=100, facecolor="white", bbox_inches="tight", bbox_extra_artists=extra)
    plt.close(fig)
