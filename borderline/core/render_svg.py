# borderline/core/render_svg.py
"""
Export the rounded outline as a self-contained SVG: optional element
rectangles plus one path holding every loop (evenodd, so holes stay open).
Coordinates are screen units with y down, so no flip is applied.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Sequence

from borderline.core.config import (
    PATH_FILL,
    PATH_STROKE,
    PATH_STROKE_WIDTH,
    RENDER_HEIGHT_PX,
    RENDER_WIDTH_PX,
    SVG_DECIMALS,
    SVG_MARGIN,
)
from borderline.core.emitter import to_svg_path_d
from borderline.core.types import OutlineResult, Rectangle

SVG_NS = "http://www.w3.org/2000/svg"


def _view_box(
    result: OutlineResult,
    rectangles: Sequence[Rectangle],
    margin: float,
) -> tuple[float, float, float, float]:
    """(min_x, min_y, width, height) covering the outline and rectangles plus margin."""
    xs: list[float] = []
    ys: list[float] = []
    if result.bounding is not None:
        b = result.bounding
        xs += [b.left, b.right]
        ys += [b.top, b.bottom]
    for r in rectangles:
        xs += [r.left, r.right]
        ys += [r.top, r.bottom]
    if not xs:
        return (0.0, 0.0, 1.0, 1.0)
    min_x, min_y = min(xs) - margin, min(ys) - margin
    vw = max(1.0, max(xs) + margin - min_x)
    vh = max(1.0, max(ys) + margin - min_y)
    return (min_x, min_y, vw, vh)


def outline_svg_element(
    result: OutlineResult,
    rectangles: Sequence[Rectangle] = (),
    stroke: str = PATH_STROKE,
    stroke_width: float = PATH_STROKE_WIDTH,
    fill: str = PATH_FILL,
    decimals: int = SVG_DECIMALS,
    margin: float = SVG_MARGIN,
) -> ET.Element:
    """Build the <svg> element tree without touching the filesystem."""
    min_x, min_y, vw, vh = _view_box(result, rectangles, margin)
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": str(RENDER_WIDTH_PX),
            "height": str(RENDER_HEIGHT_PX),
            "viewBox": f"{min_x:.2f} {min_y:.2f} {vw:.2f} {vh:.2f}",
            "preserveAspectRatio": "xMidYMid meet",
        },
    )

    if rectangles:
        g_rects = ET.SubElement(root, "g", {"id": "elements"})
        for r in rectangles:
            ET.SubElement(
                g_rects,
                "rect",
                {
                    "x": f"{r.left:.{decimals}f}",
                    "y": f"{r.top:.{decimals}f}",
                    "width": f"{r.width:.{decimals}f}",
                    "height": f"{r.height:.{decimals}f}",
                    "fill": "none",
                    "stroke": "lightgray",
                    "stroke-width": "1",
                },
            )

    path_d = to_svg_path_d(result.loops, decimals=decimals)
    if path_d:
        ET.SubElement(
            root,
            "path",
            {
                "id": "borderline",
                "d": path_d,
                "fill": fill,
                "fill-rule": "evenodd",
                "stroke": stroke,
                "stroke-width": f"{stroke_width:g}",
                "stroke-linejoin": "bevel",
            },
        )
    return root


def export_outline_svg(
    result: OutlineResult,
    out_path: str | Path,
    rectangles: Sequence[Rectangle] = (),
    stroke: str = PATH_STROKE,
    stroke_width: float = PATH_STROKE_WIDTH,
    fill: str = PATH_FILL,
) -> Path:
    """Write the SVG document to out_path and return the path."""
    root = outline_svg_element(
        result,
        rectangles,
        stroke=stroke,
        stroke_width=stroke_width,
        fill=fill,
    )
    out_str = ET.tostring(root, encoding="unicode", method="xml")
    out = Path(out_path)
    out.write_text('<?xml version="1.0" encoding="UTF-8"?>\n' + out_str, encoding="utf-8")
    return out
