# borderline/core/ingest.py
"""
Load, validate and canonicalize rectangles; clamp configuration.
Coordinates are rounded to a fixed precision so layout jitter cannot split
what should be a shared vertex. Zero-area rectangles are dropped, not errors.
See: docs/ALGORITHM.md section 1.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable, Mapping

from borderline.core.config import (
    CORNER_RADIUS,
    MAX_CONTROL_RATIO,
    MIN_CONTROL_RATIO,
)
from borderline.core.error_codes import InvalidInputError
from borderline.core.types import OutlineConfig, Rectangle

logger = logging.getLogger(__name__)

_RECT_KEYS = ("left", "top", "right", "bottom")


def canonical(value: float, precision: int) -> float:
    """Round to precision; -0.0 becomes 0.0 so output stays bit-identical."""
    return round(float(value), precision) + 0.0


def coerce_rectangle(raw: Any) -> Rectangle:
    """
    Accept a Rectangle, a (left, top, right, bottom) sequence or a mapping with
    those keys. Raises InvalidInputError for anything else or non-finite values.
    """
    if isinstance(raw, Rectangle):
        values = (raw.left, raw.top, raw.right, raw.bottom)
    elif isinstance(raw, Mapping):
        try:
            values = tuple(raw[k] for k in _RECT_KEYS)
        except KeyError as exc:
            raise InvalidInputError(f"Rectangle mapping is missing key {exc}") from exc
    elif isinstance(raw, (list, tuple)) and len(raw) == 4:
        values = tuple(raw)
    else:
        raise InvalidInputError(f"Not a rectangle: {raw!r}")
    try:
        left, top, right, bottom = (float(v) for v in values)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Rectangle has non-numeric coordinates: {raw!r}") from exc
    if not all(math.isfinite(v) for v in (left, top, right, bottom)):
        raise InvalidInputError(f"Rectangle has NaN or infinite coordinates: {raw!r}")
    return Rectangle(left, top, right, bottom)


def ingest_rectangles(rectangles: Iterable[Any], precision: int) -> list[Rectangle]:
    """
    Canonicalize rectangles: round coordinates, drop zero-area and duplicate
    entries (first occurrence kept). An empty result is valid.
    """
    out: list[Rectangle] = []
    seen: set[Rectangle] = set()
    dropped = 0
    for raw in rectangles:
        rect = coerce_rectangle(raw)
        rect = Rectangle(
            canonical(rect.left, precision),
            canonical(rect.top, precision),
            canonical(rect.right, precision),
            canonical(rect.bottom, precision),
        )
        if rect.right <= rect.left or rect.bottom <= rect.top:
            dropped += 1
            continue
        if rect in seen:
            continue
        seen.add(rect)
        out.append(rect)
    if dropped:
        logger.debug("Dropped %d degenerate rectangle(s)", dropped)
    return out


def normalize_config(config: OutlineConfig | None) -> OutlineConfig:
    """Clamp out-of-range options to the nearest valid value; never raises."""
    cfg = config if config is not None else OutlineConfig()
    radius = float(cfg.corner_radius)
    if math.isnan(radius) or radius == math.inf:
        radius = CORNER_RADIUS
    radius = max(0.0, radius)
    ratio = float(cfg.control_ratio)
    if math.isnan(ratio):
        ratio = MAX_CONTROL_RATIO
    ratio = min(MAX_CONTROL_RATIO, max(MIN_CONTROL_RATIO, ratio))
    precision = max(0, int(cfg.coordinate_precision))
    return replace(
        cfg,
        corner_radius=radius,
        control_ratio=ratio,
        coordinate_precision=precision,
    )


def load_rectangles(path: str | Path, repo_root: Path | None = None) -> list[Rectangle]:
    """
    Read rectangles from a JSON file: either a list of rectangles or an object
    with a "rectangles" list. Relative paths resolve against repo_root.
    Raises FileNotFoundError if missing, InvalidInputError if malformed.
    """
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    p = p.resolve()
    if not p.exists():
        raise FileNotFoundError(f"Rectangle file not found: {p}")
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"Rectangle file is not valid JSON: {p}") from exc
    if isinstance(data, Mapping):
        data = data.get("rectangles")
    if not isinstance(data, list):
        raise InvalidInputError(f"Expected a list of rectangles in {p}")
    return [coerce_rectangle(item) for item in data]
