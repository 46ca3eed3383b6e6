# borderline/core/reporting.py
"""
Create reports/<run_name>/ and write outline.json and run_metadata.json.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from borderline.core.config import (
    CONTROL_RATIO,
    COORDINATE_PRECISION,
    CORNER_RADIUS,
    REPORTS_DIR,
    SVG_DECIMALS,
)
from borderline.core.emitter import to_svg_path_d
from borderline.core.geometry import enclosed_area, rectangles_union
from borderline.core.types import (
    ClosePath,
    CurveTo,
    LineTo,
    MoveTo,
    OutlineConfig,
    OutlineResult,
    PathCommand,
    Point,
    Rectangle,
)

SCHEMA_VERSION = "1.0"


def _point(p: Point | None) -> dict | None:
    if p is None:
        return None
    return {"x": float(p[0]), "y": float(p[1])}


def command_to_dict(cmd: PathCommand) -> dict:
    if isinstance(cmd, MoveTo):
        return {"op": "move", "point": _point(cmd.point)}
    if isinstance(cmd, LineTo):
        return {"op": "line", "point": _point(cmd.point)}
    if isinstance(cmd, CurveTo):
        return {
            "op": "curve",
            "control1": _point(cmd.control1),
            "control2": _point(cmd.control2),
            "end": _point(cmd.end),
        }
    if isinstance(cmd, ClosePath):
        return {"op": "close"}
    raise TypeError(f"Unknown path command: {cmd!r}")


def outline_to_dict(
    result: OutlineResult,
    rectangles: Sequence[Rectangle] = (),
    decimals: int = SVG_DECIMALS,
) -> dict:
    """Exact structure for outline.json."""
    union_area = float(rectangles_union(rectangles).area) if rectangles else 0.0
    extremes = result.extreme_corners
    return {
        "schema_version": SCHEMA_VERSION,
        "loops": [
            {
                "winding": loop.winding,
                "vertices": [_point(v) for v in loop.vertices],
                "corners": [
                    {
                        "kind": c.kind,
                        "vertices": [_point(v) for v in c.vertices],
                        "radius_in": c.radius_in,
                        "radius_out": c.radius_out,
                    }
                    for c in loop.corners
                ],
                "commands": [command_to_dict(cmd) for cmd in loop.commands],
            }
            for loop in result.loops
        ],
        "extreme_corners": (
            {
                "top_left": _point(extremes.top_left),
                "top_right": _point(extremes.top_right),
                "bottom_left": _point(extremes.bottom_left),
                "bottom_right": _point(extremes.bottom_right),
            }
            if extremes is not None
            else None
        ),
        "bounding": asdict(result.bounding) if result.bounding is not None else None,
        "svg_path": to_svg_path_d(result.loops, decimals=decimals),
        "metrics": {
            "loop_count": len(result.loops),
            "hole_count": sum(1 for loop in result.loops if loop.winding == "hole"),
            "enclosed_area": enclosed_area(result),
            "union_area": union_area,
        },
    }


def run_metadata_dict(run_name: str, rectangles_path: str, config: OutlineConfig) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "rectangles_path": rectangles_path,
        "options": asdict(config),
        "defaults": {
            "CORNER_RADIUS": CORNER_RADIUS,
            "CONTROL_RATIO": CONTROL_RATIO,
            "COORDINATE_PRECISION": COORDINATE_PRECISION,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Make <repo_root>/<output_dir or REPORTS_DIR>/<run_name>/ if needed and return it."""
    report_dir = (repo_root / (output_dir or REPORTS_DIR)).resolve() / run_name
    report_dir.mkdir(parents=True, exist_ok=True)
    return report_dir


def write_outline_json(
    report_dir: Path,
    result: OutlineResult,
    rectangles: Sequence[Rectangle] = (),
) -> Path:
    """Write outline.json to report_dir. Returns path to file."""
    path = report_dir / "outline.json"
    data = outline_to_dict(result, rectangles)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    rectangles_path: str,
    config: OutlineConfig,
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, rectangles_path, config)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
