# borderline/core/config.py
"""
Central configuration for the outline kernel and its output surfaces.
All tunable values live here; no magic numbers in other modules.
See: docs/ALGORITHM.md.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
DEFAULT_RECTANGLES_PATH: str = "docs/assets/stacked_boxes.json"
REPORTS_DIR: str = "reports"

# ----- Corner rounding -----
CORNER_RADIUS: float = 20.0
"""Target fillet radius, in the same units as the rectangle coordinates."""

CONTROL_RATIO: float = 0.55228
"""Bezier control-point distance ratio (circle-approximation kappa)."""

MIN_CONTROL_RATIO: float = 1e-6
"""Smallest control ratio accepted; lower values are clamped up to this."""

MAX_CONTROL_RATIO: float = 1.0

SKIP_SMALL_LEDGES: bool = False
"""Merge edges shorter than the corner radius into a single ledge curve."""

# ----- Ingestion -----
COORDINATE_PRECISION: int = 3
"""Decimal digits kept when canonicalizing coordinates (absorbs layout jitter)."""

# ----- SVG export -----
SVG_DECIMALS: int = 3
"""Decimal places written into SVG path data."""

SVG_MARGIN: float = 20.0
"""Margin (coordinate units) added around the bounding box for the viewBox."""

PATH_STROKE: str = "blue"
PATH_STROKE_WIDTH: float = 4.0
PATH_FILL: str = "none"

# ----- Rendering (debug PNG) -----
RENDER_WIDTH_PX: int = 800
RENDER_HEIGHT_PX: int = 600

# ----- Debug flags -----
OUTLINE_DEBUG: bool = os.environ.get("OUTLINE_DEBUG", "").lower() in ("1", "true", "yes")
"""Log per-loop tracing details. Set env OUTLINE_DEBUG=1 to enable."""
