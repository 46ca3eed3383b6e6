# borderline/core/smoothing.py
"""
Curve smoother: turn each loop vertex into a rounded, sharp or ledge corner.

Radii are clamped to half of each adjacent edge so neighbouring fillets never
overlap. Control points sit at radius * control_ratio from the vertex along
each edge. With skip_small_ledges, runs of edges shorter than the radius are
bridged by one curve whose controls scale with the anchor-to-anchor distance.
See: docs/ALGORITHM.md section 5.
"""

from __future__ import annotations

import math
from typing import Sequence

from borderline.core.types import Corner, OutlineConfig, Point


def _unit(a: Point, b: Point) -> tuple[float, float]:
    """Unit vector from a to b."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    d = math.hypot(dx, dy)
    return (dx / d, dy / d)


def _offset(p: Point, u: tuple[float, float], dist: float) -> Point:
    return (p[0] + u[0] * dist, p[1] + u[1] * dist)


def _distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def _collinear(a: Point, b: Point, c: Point) -> bool:
    return (a[0] == b[0] == c[0]) or (a[1] == b[1] == c[1])


def turning_vertices(loop: Sequence[Point]) -> list[Point]:
    """Vertices where the loop actually changes direction."""
    n = len(loop)
    return [v for i, v in enumerate(loop) if not _collinear(loop[i - 1], v, loop[(i + 1) % n])]


def round_corner(prev: Point, v: Point, nxt: Point, radius: float, ratio: float) -> Corner:
    u_in = _unit(prev, v)
    u_out = _unit(v, nxt)
    r1 = min(radius, _distance(prev, v) / 2.0)
    r2 = min(radius, _distance(v, nxt) / 2.0)
    return Corner(
        kind="round",
        vertices=(v,),
        incoming=(prev, v),
        outgoing=(v, nxt),
        radius_in=r1,
        radius_out=r2,
        start_anchor=_offset(v, u_in, -r1),
        end_anchor=_offset(v, u_out, r2),
        control1=_offset(v, u_in, -r1 * ratio),
        control2=_offset(v, u_out, r2 * ratio),
    )


def sharp_corner(prev: Point, v: Point, nxt: Point) -> Corner:
    return Corner(
        kind="sharp",
        vertices=(v,),
        incoming=(prev, v),
        outgoing=(v, nxt),
        radius_in=0.0,
        radius_out=0.0,
        start_anchor=v,
        end_anchor=v,
    )


def ledge_corner(prev: Point, run: Sequence[Point], nxt: Point, radius: float, ratio: float) -> Corner:
    """
    One curve replacing a run of vertices joined by short edges. Both controls
    are placed along the entering and leaving edges at ratio * the straight
    distance between the two anchors, so the curve cannot loop back on itself.
    """
    first, last = run[0], run[-1]
    u_in = _unit(prev, first)
    u_out = _unit(last, nxt)
    r1 = min(radius, _distance(prev, first) / 2.0)
    r2 = min(radius, _distance(last, nxt) / 2.0)
    start = _offset(first, u_in, -r1)
    end = _offset(last, u_out, r2)
    span = _distance(start, end) * ratio
    return Corner(
        kind="ledge",
        vertices=tuple(run),
        incoming=(prev, first),
        outgoing=(last, nxt),
        radius_in=r1,
        radius_out=r2,
        start_anchor=start,
        end_anchor=end,
        control1=_offset(start, u_in, span),
        control2=_offset(end, u_out, -span),
    )


def corner_groups(short: Sequence[bool]) -> list[list[int]]:
    """
    Group vertex indices joined by short edges. short[i] refers to the edge
    from vertex i to vertex i+1. Without short edges (or when every edge is
    short, or only one long edge to bridge from) each vertex is its own
    group, in loop order.
    """
    n = len(short)
    if sum(1 for s in short if not s) < 2:
        return [[i] for i in range(n)]
    start = next(i for i in range(n) if not short[i - 1])
    groups: list[list[int]] = []
    current: list[int] = []
    for j in range(n):
        i = (start + j) % n
        current.append(i)
        if not short[i]:
            groups.append(current)
            current = []
    return groups


def smooth_loop(
    loop: Sequence[Point],
    config: OutlineConfig,
    sharp: frozenset[Point] = frozenset(),
) -> tuple[Corner, ...]:
    """Corners for one traced loop under an already normalized config."""
    turns = turning_vertices(loop)
    n = len(turns)
    if n < 3:
        return ()
    radius = config.corner_radius
    ratio = config.control_ratio

    short = [False] * n
    if config.skip_small_ledges and radius > 0:
        for i in range(n):
            a, b = turns[i], turns[(i + 1) % n]
            short[i] = _distance(a, b) < radius and a not in sharp and b not in sharp

    corners: list[Corner] = []
    for group in corner_groups(short):
        prev = turns[group[0] - 1]
        nxt = turns[(group[-1] + 1) % n]
        if len(group) > 1:
            corners.append(ledge_corner(prev, [turns[i] for i in group], nxt, radius, ratio))
            continue
        v = turns[group[0]]
        if radius == 0 or v in sharp:
            corners.append(sharp_corner(prev, v, nxt))
        else:
            corners.append(round_corner(prev, v, nxt, radius, ratio))
    return tuple(corners)
