"""Trend direction classification for metric series.

Two variants:

* dense series (daily wearable / journal data): mean of the first window
  against the mean of the last window;
* sparse series (a handful of imaging scans or lab draws a year): first
  value against last value, as a percent change.

The classifier only reports direction. Whether a direction is good is the
caller's polarity flag, applied through :func:`trend_tone`.
"""

from __future__ import annotations

import logging
import statistics
from collections.abc import Sequence

from healthcurve.domains.metrics.domain_logic.metric_models import (
    DEFAULT_NOISE_THRESHOLD,
    ERROR,
    NEUTRAL,
    SPARSE_MIN_PERCENT_CHANGE,
    SUCCESS,
    TREND_WINDOW,
    InvalidArgumentError,
    MetricSample,
    TrendDirection,
)

logger = logging.getLogger(__name__)


def ordered_values(samples: Sequence[MetricSample]) -> list[float]:
    """Return sample values in chronological order (input may be unsorted)."""
    return [s.value for s in sorted(samples, key=lambda s: s.moment)]


def classify_trend(
    series: Sequence[float],
    noise_threshold: float = DEFAULT_NOISE_THRESHOLD,
    *,
    window: int = TREND_WINDOW,
) -> TrendDirection:
    """Classify a dense series by comparing its first and last windows.

    Series shorter than ``2 * window`` points are STABLE (not enough signal).
    """
    if window <= 0:
        raise InvalidArgumentError(f"window must be positive, got {window}")
    if noise_threshold < 0:
        raise InvalidArgumentError(f"noise_threshold must be >= 0, got {noise_threshold}")

    if len(series) < 2 * window:
        return TrendDirection.STABLE

    first_avg = statistics.fmean(series[:window])
    last_avg = statistics.fmean(series[-window:])
    delta = last_avg - first_avg

    if delta > noise_threshold:
        return TrendDirection.INCREASING
    if delta < -noise_threshold:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def percent_change(first: float, last: float) -> tuple[float, float | None]:
    """Return ``(delta, percent)``; percent is None when ``first`` is zero."""
    delta = last - first
    if first == 0:
        return delta, None
    return delta, abs(delta / first) * 100


def classify_sparse_trend(
    series: Sequence[float],
    min_percent_change: float = SPARSE_MIN_PERCENT_CHANGE,
) -> TrendDirection:
    """Classify a sparse series by first-vs-last percent change."""
    if len(series) < 2:
        return TrendDirection.STABLE

    delta, percent = percent_change(series[0], series[-1])
    if percent is None:
        logger.debug("First value is zero; percent change undefined, reporting stable")
        return TrendDirection.STABLE
    if percent < min_percent_change:
        return TrendDirection.STABLE
    return TrendDirection.INCREASING if delta > 0 else TrendDirection.DECREASING


def trend_tone(direction: TrendDirection, higher_is_better: bool) -> str:
    """Map direction x polarity to a semantic color token."""
    if direction == TrendDirection.STABLE:
        return NEUTRAL
    rising = direction == TrendDirection.INCREASING
    return SUCCESS if rising == higher_is_better else ERROR
