"""Smooth curve paths for sparkline and trend charts.

Output is a declarative path description (``M`` move-to, ``C`` cubic
Bezier, ``L`` line-to, ``Z`` close) that any 2D vector surface can draw.
Coordinates are rounded to 2 decimals so identical input always yields
byte-identical output.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from healthcurve.domains.metrics.domain_logic.metric_models import (
    AUTO_RANGE_PAD,
    DEFAULT_TENSION,
    ChartPadding,
    InvalidArgumentError,
)

logger = logging.getLogger(__name__)

Point = tuple[float, float]


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _xy(point: Point) -> str:
    return f"{_fmt(point[0])},{_fmt(point[1])}"


def _check_box(width: float, height: float) -> None:
    if width <= 0 or height <= 0:
        raise InvalidArgumentError(f"Chart box must be positive, got {width}x{height}")


def _check_tension(tension: float) -> None:
    if not 0 <= tension <= 1:
        raise InvalidArgumentError(f"tension must be within [0, 1], got {tension}")


def auto_range(values: Sequence[float]) -> tuple[float, float]:
    """Padded y-range for a series.

    Each end moves outward by 10% of its own magnitude: ``min * 0.9`` to
    ``max * 1.1`` for positive data, mirrored for negative data so points
    stay inside the box.
    """
    lo, hi = min(values), max(values)
    return lo - abs(lo) * AUTO_RANGE_PAD, hi + abs(hi) * AUTO_RANGE_PAD


def normalize_points(
    values: Sequence[float],
    width: float,
    height: float,
    min_val: float | None = None,
    max_val: float | None = None,
    padding: ChartPadding | None = None,
) -> list[Point]:
    """Map values into screen coordinates.

    x is spaced evenly across the plot box; y is mapped inversely from
    ``[min_val, max_val]`` onto ``[bottom, top]``. A zero range is replaced
    with 1 so the curve degenerates to a flat line.
    """
    _check_box(width, height)
    if not values:
        return []

    pad = padding or ChartPadding()
    plot_w = width - pad.left - pad.right
    plot_h = height - pad.top - pad.bottom
    _check_box(plot_w, plot_h)

    auto_lo, auto_hi = auto_range(values)
    lo = auto_lo if min_val is None else min_val
    hi = auto_hi if max_val is None else max_val
    span = hi - lo
    if span == 0:
        logger.debug("Flat value range at %s; drawing a flat line", lo)
        span = 1.0

    n = len(values)
    points: list[Point] = []
    for i, v in enumerate(values):
        x = pad.left + (i / (n - 1) * plot_w if n > 1 else 0.0)
        y = pad.top + plot_h - (v - lo) / span * plot_h
        points.append((x, y))
    return points


def smooth_path_from_points(points: Sequence[Point], tension: float = DEFAULT_TENSION) -> str:
    """Join screen points with horizontal-tangent cubic Bezier segments.

    Control points sit ``tension * dx`` inside each segment and keep the y of
    their own endpoint, which avoids overshoot on monotonic data.
    """
    _check_tension(tension)
    if not points:
        return ""

    parts = [f"M {_xy(points[0])}"]
    for (px, py), (x, y) in zip(points, points[1:]):
        dx = x - px
        c1 = (px + dx * tension, py)
        c2 = (x - dx * tension, y)
        parts.append(f"C {_xy(c1)} {_xy(c2)} {_xy((x, y))}")
    return " ".join(parts)


def build_smooth_path(
    values: Sequence[float],
    width: float,
    height: float,
    min_val: float | None = None,
    max_val: float | None = None,
    *,
    tension: float = DEFAULT_TENSION,
    padding: ChartPadding | None = None,
) -> str:
    """Smooth curve through ``values`` inside a ``width`` x ``height`` box.

    No values gives an empty string (the caller shows an empty state); a
    single value gives a lone move-to.
    """
    points = normalize_points(values, width, height, min_val, max_val, padding)
    return smooth_path_from_points(points, tension)


def build_area_path(
    values: Sequence[float],
    width: float,
    height: float,
    min_val: float | None = None,
    max_val: float | None = None,
    *,
    tension: float = DEFAULT_TENSION,
    padding: ChartPadding | None = None,
) -> str:
    """The smooth curve closed down to the chart baseline, for area fills."""
    if len(values) < 2:
        return ""
    points = normalize_points(values, width, height, min_val, max_val, padding)
    curve = smooth_path_from_points(points, tension)
    first_x = points[0][0]
    last_x = points[-1][0]
    return f"{curve} L {_xy((last_x, height))} L {_xy((first_x, height))} Z"


def build_catmull_rom_path(points: Sequence[Point], tension: float = 0.3) -> str:
    """Neighbour-aware smoothing: control points follow the adjacent slope.

    Unlike :func:`smooth_path_from_points` this can overshoot on sharp turns.
    """
    _check_tension(tension)
    if len(points) < 2:
        return ""

    parts = [f"M {_xy(points[0])}"]
    last = len(points) - 1
    for i in range(last):
        p0 = points[i - 1] if i > 0 else points[i]
        p1 = points[i]
        p2 = points[i + 1]
        p3 = points[i + 2] if i + 2 <= last else p2
        c1 = (p1[0] + (p2[0] - p0[0]) * tension, p1[1] + (p2[1] - p0[1]) * tension)
        c2 = (p2[0] - (p3[0] - p1[0]) * tension, p2[1] - (p3[1] - p1[1]) * tension)
        parts.append(f"C {_xy(c1)} {_xy(c2)} {_xy(p2)}")
    return " ".join(parts)


# ---------------------------------------------------------------------------
# Ring geometry (vitality ring)
# ---------------------------------------------------------------------------

def polar_to_cartesian(cx: float, cy: float, radius: float, angle_deg: float) -> Point:
    """Angle 0 points straight up; angles grow clockwise."""
    rad = math.radians(angle_deg - 90)
    return cx + radius * math.cos(rad), cy + radius * math.sin(rad)


def arc_path(cx: float, cy: float, radius: float, start_deg: float, end_deg: float) -> str:
    if radius <= 0:
        raise InvalidArgumentError(f"radius must be positive, got {radius}")
    start = polar_to_cartesian(cx, cy, radius, end_deg)
    end = polar_to_cartesian(cx, cy, radius, start_deg)
    large_arc = 0 if end_deg - start_deg <= 180 else 1
    return (
        f"M {_xy(start)} A {_fmt(radius)},{_fmt(radius)} 0 {large_arc} 0 {_xy(end)}"
    )


def progress_offset(progress: float, circumference: float, max_progress: float = 100) -> float:
    """Stroke dash offset that reveals ``progress`` of a ring."""
    if max_progress <= 0:
        raise InvalidArgumentError(f"max_progress must be positive, got {max_progress}")
    clamped = max(0.0, min(max_progress, progress))
    return circumference - clamped / max_progress * circumference
