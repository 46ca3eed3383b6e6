# borderline/core/graph.py
"""
Boundary graph: edge multiset with parity cancellation and a coordinate index.

The rectangles are cut along every distinct x and y into disjoint grid cells.
Each covered cell owns its 4 clockwise edges; a segment shared by two covered
cells appears once in each direction and cancels, so only the outer boundary
(and hole boundaries) survive, directed clockwise around the covered area.
build_boundary_graph gets the same set from a single numpy comparison of
neighbouring cells instead of visiting each cell. See: docs/ALGORITHM.md section 2.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections import defaultdict
from dataclasses import dataclass

import numpy as np

from borderline.core.types import DirectedEdge, Point, Rectangle


def edge_key(start: Point, end: Point) -> DirectedEdge:
    """Orientation-independent key: endpoints in sorted order."""
    return (start, end) if start <= end else (end, start)


class EdgeMultiset:
    """Signed occupancy per unordered edge. A->B counts +1, B->A counts -1."""

    def __init__(self) -> None:
        self._counts: dict[DirectedEdge, int] = defaultdict(int)

    def add(self, start: Point, end: Point) -> None:
        key = edge_key(start, end)
        self._counts[key] += 1 if key[0] == start else -1

    def count(self, start: Point, end: Point) -> int:
        """Net count seen from start->end (negative when mostly traversed the other way)."""
        key = edge_key(start, end)
        n = self._counts.get(key, 0)
        return n if key[0] == start else -n

    def __len__(self) -> int:
        return len(self._counts)

    def boundary_edges(self) -> set[DirectedEdge]:
        """Edges with odd net occupancy, directed by the sign of the count."""
        out: set[DirectedEdge] = set()
        for (a, b), n in self._counts.items():
            if n % 2 == 0:
                continue
            out.add((a, b) if n > 0 else (b, a))
        return out


@dataclass(frozen=True)
class CoordinateIndex:
    """x -> sorted ys and y -> sorted xs of every boundary edge endpoint."""
    ys_by_x: dict[float, list[float]]
    xs_by_y: dict[float, list[float]]

    @classmethod
    def from_edges(cls, edges: set[DirectedEdge]) -> CoordinateIndex:
        ys: dict[float, set[float]] = defaultdict(set)
        xs: dict[float, set[float]] = defaultdict(set)
        for edge in edges:
            for x, y in edge:
                ys[x].add(y)
                xs[y].add(x)
        return cls(
            ys_by_x={x: sorted(v) for x, v in ys.items()},
            xs_by_y={y: sorted(v) for y, v in xs.items()},
        )

    def nearest(self, point: Point, direction: tuple[int, int]) -> Point | None:
        """
        Closest indexed point strictly beyond `point` along an axis direction
        (dx, dy) in {(0,-1), (1,0), (0,1), (-1,0)}. None if the ray is empty.
        """
        x, y = point
        dx, dy = direction
        if dx == 0:
            values = self.ys_by_x.get(x)
            if not values:
                return None
            if dy > 0:
                i = bisect_right(values, y)
                return (x, values[i]) if i < len(values) else None
            i = bisect_left(values, y)
            return (x, values[i - 1]) if i > 0 else None
        values = self.xs_by_y.get(y)
        if not values:
            return None
        if dx > 0:
            i = bisect_right(values, x)
            return (values[i], y) if i < len(values) else None
        i = bisect_left(values, x)
        return (values[i - 1], y) if i > 0 else None


@dataclass(frozen=True)
class BoundaryGraph:
    edges: frozenset[DirectedEdge]
    index: CoordinateIndex
    corner_points: frozenset[Point]
    """Corners of the input rectangles; the tracer keeps these as loop vertices."""

    @property
    def is_empty(self) -> bool:
        return not self.edges


def coverage_grid(rectangles: list[Rectangle]) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Compressed grid of the arrangement: sorted distinct xs, ys and a boolean
    (len(ys)-1, len(xs)-1) array marking the cells covered by any rectangle.
    """
    xs = np.unique(np.array([v for r in rectangles for v in (r.left, r.right)], dtype=float))
    ys = np.unique(np.array([v for r in rectangles for v in (r.top, r.bottom)], dtype=float))
    covered = np.zeros((max(len(ys) - 1, 0), max(len(xs) - 1, 0)), dtype=bool)
    for r in rectangles:
        j0, j1 = np.searchsorted(xs, [r.left, r.right])
        i0, i1 = np.searchsorted(ys, [r.top, r.bottom])
        covered[i0:i1, j0:j1] = True
    return xs, ys, covered


def build_edge_multiset(rectangles: list[Rectangle]) -> EdgeMultiset:
    """
    Insert the clockwise edges of every covered grid cell, one cell at a time.
    Same boundary as grid_boundary_edges but proportional to the cell count.
    """
    multiset = EdgeMultiset()
    if not rectangles:
        return multiset
    xs, ys, covered = coverage_grid(rectangles)
    for i, j in np.argwhere(covered):
        cell = Rectangle(float(xs[j]), float(ys[i]), float(xs[j + 1]), float(ys[i + 1]))
        for start, end in cell.edges():
            multiset.add(start, end)
    return multiset


def grid_boundary_edges(xs: np.ndarray, ys: np.ndarray, covered: np.ndarray) -> EdgeMultiset:
    """
    Boundary edges of the coverage grid in one vectorized pass: a grid segment
    is boundary where the cells on its two sides differ. The covered side sets
    the direction, so the result is clockwise around the covered area.
    """
    multiset = EdgeMultiset()
    if covered.size == 0:
        return multiset
    padded = np.pad(covered, 1, constant_values=False)

    # Horizontal segment (ys[i], xs[j]..xs[j+1]): cell above is padded[i, j+1], below padded[i+1, j+1]
    above = padded[:-1, 1:-1]
    below = padded[1:, 1:-1]
    for i, j in zip(*np.nonzero(below & ~above)):
        y = float(ys[i])
        multiset.add((float(xs[j]), y), (float(xs[j + 1]), y))
    for i, j in zip(*np.nonzero(above & ~below)):
        y = float(ys[i])
        multiset.add((float(xs[j + 1]), y), (float(xs[j]), y))

    # Vertical segment (xs[j], ys[i]..ys[i+1]): cell left is padded[i+1, j], right padded[i+1, j+1]
    left = padded[1:-1, :-1]
    right = padded[1:-1, 1:]
    for i, j in zip(*np.nonzero(right & ~left)):
        x = float(xs[j])
        multiset.add((x, float(ys[i + 1])), (x, float(ys[i])))
    for i, j in zip(*np.nonzero(left & ~right)):
        x = float(xs[j])
        multiset.add((x, float(ys[i])), (x, float(ys[i + 1])))
    return multiset


def build_boundary_graph(rectangles: list[Rectangle]) -> BoundaryGraph:
    """Boundary edge set, coordinate index and input corners for canonical rectangles."""
    if rectangles:
        edges = grid_boundary_edges(*coverage_grid(rectangles)).boundary_edges()
    else:
        edges = set()
    corners = frozenset(p for r in rectangles for p in r.corners())
    return BoundaryGraph(
        edges=frozenset(edges),
        index=CoordinateIndex.from_edges(edges),
        corner_points=corners,
    )
