# borderline/core/outline.py
"""
Kernel entrypoint: rectangles + config -> rounded outline loops.
Pure and synchronous; every call rebuilds all intermediate values.
See: docs/ALGORITHM.md.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from borderline.core.corners import find_bounding, find_extreme_corners, sharp_points
from borderline.core.emitter import emit_loop
from borderline.core.error_codes import TRACE_FAILED, TraceFailure, user_message
from borderline.core.graph import build_boundary_graph
from borderline.core.ingest import ingest_rectangles, normalize_config
from borderline.core.smoothing import smooth_loop
from borderline.core.tracer import trace_loops
from borderline.core.types import OutlineConfig, OutlineResult

logger = logging.getLogger(__name__)


def compute_outline(rectangles: Iterable[Any], config: OutlineConfig | None = None) -> OutlineResult:
    """
    Trace the union outline of the rectangles and round its corners.
    Empty or fully degenerate input gives an empty result. Raises
    InvalidInputError for non-finite coordinates, TraceFailure if the boundary
    cannot be walked.
    """
    cfg = normalize_config(config)
    rects = ingest_rectangles(rectangles, cfg.coordinate_precision)
    if not rects:
        return OutlineResult()

    graph = build_boundary_graph(rects)
    vertex_loops = trace_loops(graph)
    extremes = find_extreme_corners(vertex_loops)
    sharp = sharp_points(extremes, cfg.corner_sharpness)

    loops = tuple(
        emit_loop(vertices, smooth_loop(vertices, cfg, sharp)) for vertices in vertex_loops
    )
    logger.debug(
        "Outline of %d rectangle(s): %d loop(s), %d boundary edge(s)",
        len(rects),
        len(loops),
        len(graph.edges),
    )
    return OutlineResult(
        loops=loops,
        extreme_corners=extremes,
        bounding=find_bounding(vertex_loops),
    )


def safe_compute_outline(
    rectangles: Iterable[Any],
    config: OutlineConfig | None = None,
    previous: OutlineResult | None = None,
) -> OutlineResult | None:
    """
    compute_outline for callers that redraw on every layout change: a trace
    failure is logged and the previous result is returned instead.
    """
    try:
        return compute_outline(rectangles, config)
    except TraceFailure as exc:
        logger.warning("%s (%s)", user_message(TRACE_FAILED), exc)
        return previous
