# borderline/core/types.py
"""
Value types for rectangles, configuration, corners, path commands and results.
Every type is immutable; the kernel rebuilds all of them on each invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

from borderline.core.config import (
    CONTROL_RATIO,
    COORDINATE_PRECISION,
    CORNER_RADIUS,
    SKIP_SMALL_LEDGES,
)

Point = tuple[float, float]
DirectedEdge = tuple[Point, Point]
Winding = Literal["outer", "hole"]
CornerKind = Literal["round", "sharp", "ledge"]


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned screen rectangle; rows grow downward."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def corners(self) -> tuple[Point, Point, Point, Point]:
        """Corner points in clockwise screen order, starting top-left."""
        return (
            (self.left, self.top),
            (self.right, self.top),
            (self.right, self.bottom),
            (self.left, self.bottom),
        )

    def edges(self) -> list[DirectedEdge]:
        """The 4 directed edges following the clockwise corner order."""
        pts = self.corners()
        return [(pts[i], pts[(i + 1) % 4]) for i in range(4)]


@dataclass(frozen=True)
class CornerSharpness:
    """Which global extreme corners stay square regardless of radius."""
    top_left: bool = False
    top_right: bool = False
    bottom_left: bool = False
    bottom_right: bool = False


@dataclass(frozen=True)
class OutlineConfig:
    """Per-invocation options. Out-of-range values are clamped by ingest.normalize_config."""
    corner_radius: float = CORNER_RADIUS
    control_ratio: float = CONTROL_RATIO
    corner_sharpness: CornerSharpness = field(default_factory=CornerSharpness)
    skip_small_ledges: bool = SKIP_SMALL_LEDGES
    coordinate_precision: int = COORDINATE_PRECISION


@dataclass(frozen=True)
class ExtremeCorners:
    """Global extreme vertices of the whole arrangement."""
    top_left: Point
    top_right: Point
    bottom_left: Point
    bottom_right: Point


@dataclass(frozen=True)
class Bounding:
    left: float
    top: float
    right: float
    bottom: float


@dataclass(frozen=True)
class Corner:
    """
    One emitted corner of a loop. For a ledge, `vertices` holds every vertex the
    curve replaces and the edges are the ones entering and leaving the run.
    Sharp corners have no control points and both anchors sit on the vertex.
    """
    kind: CornerKind
    vertices: tuple[Point, ...]
    incoming: DirectedEdge
    outgoing: DirectedEdge
    radius_in: float
    radius_out: float
    start_anchor: Point
    end_anchor: Point
    control1: Point | None = None
    control2: Point | None = None

    @property
    def vertex(self) -> Point:
        return self.vertices[0]


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class CurveTo:
    control1: Point
    control2: Point
    end: Point


@dataclass(frozen=True)
class ClosePath:
    pass


PathCommand = Union[MoveTo, LineTo, CurveTo, ClosePath]


@dataclass(frozen=True)
class PathLoop:
    """A traced loop with its corners and the commands that draw it."""
    vertices: tuple[Point, ...]
    winding: Winding
    corners: tuple[Corner, ...]
    commands: tuple[PathCommand, ...]


@dataclass(frozen=True)
class OutlineResult:
    """Kernel output: zero or more loops plus the arrangement's extremes."""
    loops: tuple[PathLoop, ...] = ()
    extreme_corners: ExtremeCorners | None = None
    bounding: Bounding | None = None

    @property
    def is_empty(self) -> bool:
        return not self.loops

    def commands(self) -> list[PathCommand]:
        """All loop commands concatenated, winding preserved."""
        out: list[PathCommand] = []
        for loop in self.loops:
            out.extend(loop.commands)
        return out
