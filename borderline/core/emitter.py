# borderline/core/emitter.py
"""
Path emitter: corners -> MoveTo/LineTo/CurveTo/ClosePath, and SVG path data.
See: docs/ALGORITHM.md section 6.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from borderline.core.config import SVG_DECIMALS
from borderline.core.geometry import loop_winding
from borderline.core.types import (
    ClosePath,
    Corner,
    CurveTo,
    LineTo,
    MoveTo,
    PathCommand,
    PathLoop,
    Point,
)


def loop_commands(corners: Sequence[Corner]) -> tuple[PathCommand, ...]:
    """
    MoveTo the last corner's end anchor, then per corner either a LineTo to its
    start anchor plus a CurveTo, or (sharp) a LineTo to the vertex itself.
    A sharp corner is the pair of straight segments into and out of its vertex;
    the outgoing one is the LineTo that opens the next corner (or ClosePath
    for the last corner), so it is not emitted twice.
    """
    if not corners:
        return ()
    cmds: list[PathCommand] = [MoveTo(corners[-1].end_anchor)]
    for corner in corners:
        if corner.kind == "sharp":
            cmds.append(LineTo(corner.vertex))
            continue
        cmds.append(LineTo(corner.start_anchor))
        cmds.append(CurveTo(corner.control1, corner.control2, corner.end_anchor))
    cmds.append(ClosePath())
    return tuple(cmds)


def emit_loop(vertices: Sequence[Point], corners: Sequence[Corner]) -> PathLoop:
    return PathLoop(
        vertices=tuple(vertices),
        winding=loop_winding(vertices),
        corners=tuple(corners),
        commands=loop_commands(corners),
    )


def _fmt(value: float, decimals: int) -> str:
    s = f"{value:.{decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return "0" if s == "-0" else s


def _pt(p: Point, decimals: int) -> str:
    return f"{_fmt(p[0], decimals)} {_fmt(p[1], decimals)}"


def command_to_svg(cmd: PathCommand, decimals: int = SVG_DECIMALS) -> str:
    if isinstance(cmd, MoveTo):
        return f"M {_pt(cmd.point, decimals)}"
    if isinstance(cmd, LineTo):
        return f"L {_pt(cmd.point, decimals)}"
    if isinstance(cmd, CurveTo):
        return (
            f"C {_pt(cmd.control1, decimals)}, {_pt(cmd.control2, decimals)}, "
            f"{_pt(cmd.end, decimals)}"
        )
    if isinstance(cmd, ClosePath):
        return "Z"
    raise TypeError(f"Unknown path command: {cmd!r}")


def to_svg_path_d(loops: Iterable[PathLoop], decimals: int = SVG_DECIMALS) -> str:
    """All loops as one SVG path d string; holes keep their reversed winding."""
    return " ".join(
        command_to_svg(cmd, decimals) for loop in loops for cmd in loop.commands
    )
