# borderline/core/tracer.py
"""
Walk the boundary edge set into closed vertex loops.

At each vertex the walk tries relative-left, then straight, then
relative-right, taking the nearest indexed point along that ray whose edge is
still unconsumed. Every boundary edge is consumed exactly once; a vertex with
no continuation means the edge set is inconsistent and raises TraceFailure.
See: docs/ALGORITHM.md section 3.
"""

from __future__ import annotations

import logging

from borderline.core.config import OUTLINE_DEBUG
from borderline.core.error_codes import TraceFailure
from borderline.core.graph import BoundaryGraph, CoordinateIndex
from borderline.core.types import DirectedEdge, Point

logger = logging.getLogger(__name__)

# Clockwise on screen (y grows downward): up, right, down, left
DIRECTIONS: tuple[tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))

# Offsets into DIRECTIONS: relative left, straight, relative right. Back is never valid.
TURN_PRIORITY: tuple[int, ...] = (3, 0, 1)


def direction_of(previous: Point, current: Point) -> tuple[int, int]:
    """Unit axis direction of travel from previous to current."""
    dx = current[0] - previous[0]
    dy = current[1] - previous[1]
    if (dx == 0) == (dy == 0):
        raise TraceFailure(f"Edge {previous} -> {current} is not axis-aligned", point=current)
    return ((dx > 0) - (dx < 0), (dy > 0) - (dy < 0))


def next_point(
    previous: Point,
    current: Point,
    index: CoordinateIndex,
    remaining: set[DirectedEdge],
) -> Point:
    """Pick the continuation from current by turn priority; raise if none exists."""
    heading = DIRECTIONS.index(direction_of(previous, current))
    for offset in TURN_PRIORITY:
        direction = DIRECTIONS[(heading + offset) % len(DIRECTIONS)]
        candidate = index.nearest(current, direction)
        if candidate is not None and (current, candidate) in remaining:
            return candidate
    raise TraceFailure(f"No continuation edge at {current} (arrived from {previous})", point=current)


def _start_order(edge: DirectedEdge) -> tuple[float, float, float, float]:
    return (edge[0][1], edge[0][0], edge[1][1], edge[1][0])


def start_edge(remaining: set[DirectedEdge]) -> DirectedEdge:
    """Unconsumed edge with the smallest (y, x) start point; ties by end point."""
    return min(remaining, key=_start_order)


def drop_passthrough_vertices(loop: list[Point], keep: frozenset[Point]) -> list[Point]:
    """Remove straight-through vertices that are not input rectangle corners."""
    n = len(loop)
    out: list[Point] = []
    for i, v in enumerate(loop):
        prev = loop[i - 1]
        nxt = loop[(i + 1) % n]
        straight = (prev[0] == v[0] == nxt[0]) or (prev[1] == v[1] == nxt[1])
        if straight and v not in keep:
            continue
        out.append(v)
    return out


def trace_loop(
    graph: BoundaryGraph,
    remaining: set[DirectedEdge],
    start: DirectedEdge | None = None,
) -> list[Point]:
    """Trace one closed loop from `start` (default: start_edge), consuming its edges from `remaining`."""
    if start is None:
        start = start_edge(remaining)
    remaining.discard(start)
    origin, current = start
    previous = origin
    loop = [origin]
    while current != origin:
        loop.append(current)
        nxt = next_point(previous, current, graph.index, remaining)
        remaining.discard((current, nxt))
        previous, current = current, nxt
    return drop_passthrough_vertices(loop, graph.corner_points)


def trace_loops(graph: BoundaryGraph) -> list[tuple[Point, ...]]:
    """
    All loops of the boundary graph, in start-point order. Outer contours run
    clockwise on screen, holes counter-clockwise. Raises TraceFailure if the
    edge set cannot be walked; no partial loop is returned.
    """
    remaining = set(graph.edges)
    loops: list[tuple[Point, ...]] = []
    for edge in sorted(graph.edges, key=_start_order):
        if edge not in remaining:
            continue
        loop = trace_loop(graph, remaining, start=edge)
        if OUTLINE_DEBUG:
            logger.debug("Traced loop %d with %d vertices from %s", len(loops), len(loop), loop[0])
        loops.append(tuple(loop))
    return loops
