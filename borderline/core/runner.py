# borderline/core/runner.py
"""
CLI entrypoint: load rectangles JSON, compute the rounded outline, export.
Default input: docs/assets/stacked_boxes.json (repo-relative).
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from borderline.core.config import (
    CONTROL_RATIO,
    COORDINATE_PRECISION,
    CORNER_RADIUS,
    DEFAULT_RECTANGLES_PATH,
    PATH_FILL,
    PATH_STROKE,
    PATH_STROKE_WIDTH,
    REPORTS_DIR,
)
from borderline.core.error_codes import (
    INPUT_NOT_FOUND,
    INVALID_INPUT,
    TRACE_FAILED,
    InvalidInputError,
    TraceFailure,
    user_message,
)
from borderline.core.ingest import load_rectangles
from borderline.core.outline import compute_outline
from borderline.core.reporting import (
    ensure_report_dir,
    write_outline_json,
    write_run_metadata_json,
)
from borderline.core.types import CornerSharpness, OutlineConfig

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Rounded outline around a set of rectangles.")
    p.add_argument("--rectangles", type=str, default=DEFAULT_RECTANGLES_PATH, help="Rectangles JSON path (repo-relative)")
    p.add_argument("--corner-radius", type=float, default=CORNER_RADIUS, dest="corner_radius", help="Fillet radius")
    p.add_argument("--control-ratio", type=float, default=CONTROL_RATIO, dest="control_ratio", help="Bezier control ratio (0, 1]")
    p.add_argument("--precision", type=int, default=COORDINATE_PRECISION, help="Coordinate rounding digits")
    p.add_argument("--skip-small-ledges", action="store_true", dest="skip_small_ledges", help="Bridge edges shorter than the radius")
    p.add_argument("--sharp-top-left", action="store_true", dest="sharp_top_left", help="Keep the top-left corner square")
    p.add_argument("--sharp-top-right", action="store_true", dest="sharp_top_right", help="Keep the top-right corner square")
    p.add_argument("--sharp-bottom-left", action="store_true", dest="sharp_bottom_left", help="Keep the bottom-left corner square")
    p.add_argument("--sharp-bottom-right", action="store_true", dest="sharp_bottom_right", help="Keep the bottom-right corner square")
    p.add_argument("--stroke", type=str, default=PATH_STROKE, help="SVG stroke colour")
    p.add_argument("--stroke-width", type=float, default=PATH_STROKE_WIDTH, dest="stroke_width", help="SVG stroke width")
    p.add_argument("--fill", type=str, default=PATH_FILL, help="SVG fill colour")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--no-png", action="store_true", dest="no_png", help="Skip the matplotlib debug PNG")
    return p.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> OutlineConfig:
    return OutlineConfig(
        corner_radius=args.corner_radius,
        control_ratio=args.control_ratio,
        corner_sharpness=CornerSharpness(
            top_left=args.sharp_top_left,
            top_right=args.sharp_top_right,
            bottom_left=args.sharp_bottom_left,
            bottom_right=args.sharp_bottom_right,
        ),
        skip_small_ledges=args.skip_small_ledges,
        coordinate_precision=args.precision,
    )


def main(argv: list[str] | None = None) -> int:
    # Configure logging from env (e.g. LOG_LEVEL=DEBUG for development)
    log_level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, log_level_name, logging.INFO))

    args = _parse_args(argv)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()
    config = config_from_args(args)

    try:
        rectangles = load_rectangles(args.rectangles, repo_root=repo_root)
        result = compute_outline(rectangles, config)
    except FileNotFoundError as exc:
        logger.error("%s (%s)", user_message(INPUT_NOT_FOUND), exc)
        return 1
    except InvalidInputError as exc:
        logger.error("%s (%s)", user_message(INVALID_INPUT), exc)
        return 1
    except TraceFailure as exc:
        logger.error("%s (%s)", user_message(TRACE_FAILED), exc)
        return 2

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    outline_path = write_outline_json(report_dir, result, rectangles)
    meta_path = write_run_metadata_json(report_dir, args.run_name, args.rectangles, config)

    from borderline.core.render_svg import export_outline_svg
    svg_path = export_outline_svg(
        result,
        report_dir / "outline.svg",
        rectangles=rectangles,
        stroke=args.stroke,
        stroke_width=args.stroke_width,
        fill=args.fill,
    )
    written = [outline_path, svg_path, meta_path]

    if not args.no_png:
        from borderline.core.render import render_debug
        debug_path = report_dir / "debug.png"
        render_debug(result, rectangles, debug_path)
        written.append(debug_path)

    for p in written:
        print(p)
    print("Loops:", len(result.loops))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
