"""Metric engine models and domain constants.

Everything here is transient: built from a fetched snapshot, consumed by one
render pass, then discarded.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class InvalidArgumentError(ValueError):
    """Raised when a caller passes configuration the engine cannot honour."""


# ---------------------------------------------------------------------------
# Domain constants (display resolution, trend windows, score scales)
# ---------------------------------------------------------------------------

CHART_DISPLAY_POINTS = 30
DEFAULT_NOISE_THRESHOLD = 0.3
TREND_WINDOW = 7                 # dense trend: first 7 vs last 7 points
SPARSE_MIN_PERCENT_CHANGE = 2.0  # sparse trend: below 2% is "stable"
DEFAULT_TENSION = 0.25

JOURNAL_SCALE_MIN = 1.0          # wellness journal sliders run 1..10
JOURNAL_SCALE_MAX = 10.0

AUTO_RANGE_PAD = 0.1             # auto y-range: each end pads outward by 10% of its magnitude

# Semantic color tokens, resolved to real colors by the presentation layer
SUCCESS = "success"
POSITIVE = "positive"   # between success and info: a high but not optimal score
INFO = "info"
WARNING = "warning"
ERROR = "error"
NEUTRAL = "neutral"


# ---------------------------------------------------------------------------
# Series types
# ---------------------------------------------------------------------------

class TrendDirection(str, Enum):
    """Direction of a series relative to a noise threshold."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


@dataclass(frozen=True)
class MetricSample:
    """A single timestamped reading for one metric."""

    timestamp: str | datetime
    value: float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise InvalidArgumentError(f"Sample value must be numeric, got {self.value!r}")
        if not math.isfinite(self.value):
            raise InvalidArgumentError(f"Sample value must be finite, got {self.value!r}")

    @property
    def moment(self) -> datetime:
        """Timestamp as a ``datetime`` (ISO-8601 strings are parsed, ``Z`` allowed)."""
        if isinstance(self.timestamp, datetime):
            return self.timestamp
        text = self.timestamp.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidArgumentError(f"Unparseable timestamp: {self.timestamp!r}") from exc


MetricSeries = list[MetricSample]


# ---------------------------------------------------------------------------
# Band / score result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoreBand:
    """One row of a band table: scores >= ``min_inclusive`` get this label."""

    min_inclusive: float
    label: str
    color_token: str


@dataclass(frozen=True)
class BandResult:
    """Label and color token handed to a status badge."""

    label: str
    color_token: str

    def as_dict(self) -> dict[str, str]:
        return {"label": self.label, "color_token": self.color_token}


@dataclass(frozen=True)
class Dass21Thresholds:
    """Upper-inclusive cutoffs on the 0-42 DASS-21 raw scale."""

    normal: float
    mild: float
    moderate: float


DASS21_DEPRESSION = Dass21Thresholds(normal=9, mild=13, moderate=20)
DASS21_ANXIETY = Dass21Thresholds(normal=7, mild=9, moderate=14)
DASS21_STRESS = Dass21Thresholds(normal=14, mild=18, moderate=25)


@dataclass(frozen=True)
class PeriodChange:
    """Current-period average against the period before it."""

    avg: float
    previous_avg: float
    delta: float


@dataclass(frozen=True)
class ChartPadding:
    """Insets applied to the plot box before normalizing points."""

    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
