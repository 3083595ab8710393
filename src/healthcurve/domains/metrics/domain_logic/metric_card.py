"""Card view-models: the full engine pipeline for one metric.

raw samples -> order -> downsample -> trend -> tone -> curve paths

The rendering layer receives plain values (numbers, path strings, color
tokens) and never calls the engine itself.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

from healthcurve.core.catalog.models import MetricConfig
from healthcurve.domains.metrics.connectors.mock_data import generate_fallback_series
from healthcurve.domains.metrics.domain_logic.curve_path import (
    build_area_path,
    build_smooth_path,
)
from healthcurve.domains.metrics.domain_logic.downsampler import downsample
from healthcurve.domains.metrics.domain_logic.metric_models import (
    CHART_DISPLAY_POINTS,
    DEFAULT_NOISE_THRESHOLD,
    DEFAULT_TENSION,
    SPARSE_MIN_PERCENT_CHANGE,
    BandResult,
    MetricSample,
    PeriodChange,
    TrendDirection,
)
from healthcurve.domains.metrics.domain_logic.score_calculator import (
    period_change,
    vitality_band,
    vitality_score,
)
from healthcurve.domains.metrics.domain_logic.trend_classifier import (
    classify_sparse_trend,
    classify_trend,
    ordered_values,
    trend_tone,
)

logger = logging.getLogger(__name__)

DEFAULT_CHART_WIDTH = 300
DEFAULT_CHART_HEIGHT = 80

# Wellness journal metrics and their polarity
WELLNESS_METRICS: dict[str, bool] = {
    "mood": True,
    "energy": True,
    "stress": False,
    "sleep_quality": True,
}


@dataclass
class MetricCard:
    """Everything a trend card needs to render one metric."""

    metric_id: str
    label: str
    value: str
    unit: str
    trend: TrendDirection
    trend_tone: str
    sparkline: list[float]
    path: str
    area_path: str
    color_token: str
    is_fallback: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "metric_id": self.metric_id,
            "label": self.label,
            "value": self.value,
            "unit": self.unit,
            "trend": self.trend.value,
            "trend_tone": self.trend_tone,
            "sparkline": [round(v, 4) for v in self.sparkline],
            "path": self.path,
            "area_path": self.area_path,
            "color_token": self.color_token,
            "is_fallback": self.is_fallback,
        }


def format_value(value: float, decimals: int) -> str:
    """Fixed decimals, or a rounded thousands-separated integer."""
    if decimals > 0:
        return f"{value:.{decimals}f}"
    return f"{round(value):,}"


def build_metric_card(
    config: MetricConfig,
    samples: Sequence[MetricSample] = (),
    *,
    display_points: int = CHART_DISPLAY_POINTS,
    sparse_min_percent: float = SPARSE_MIN_PERCENT_CHANGE,
    width: float = DEFAULT_CHART_WIDTH,
    height: float = DEFAULT_CHART_HEIGHT,
    tension: float = DEFAULT_TENSION,
) -> MetricCard:
    """Build the card for ``config`` from already-fetched ``samples``.

    Sparse metrics (imaging) use their fixed scan values. Continuous metrics
    need more than two readings; otherwise a flagged fallback series is drawn.
    """
    is_fallback = False

    if config.is_sparse:
        values = list(config.sparse_values)
        sparkline = values
        trend = classify_sparse_trend(values, sparse_min_percent)
        current = values[-1]
    else:
        values = ordered_values(samples)
        if len(values) > 2:
            sparkline = downsample(values, display_points)
            trend = classify_sparse_trend(values, sparse_min_percent)
            current = values[-1]
        else:
            logger.debug("No usable readings for %s; using fallback series", config.id)
            is_fallback = True
            sparkline = generate_fallback_series(
                config.fallback_base,
                config.fallback_variance,
                config.fallback_trend,
                display_points,
            )
            trend = config.fallback_trend
            current = values[-1] if values else config.fallback_base

    return MetricCard(
        metric_id=config.id,
        label=config.label,
        value=format_value(current, config.decimals),
        unit=config.unit,
        trend=trend,
        trend_tone=trend_tone(trend, config.higher_is_better),
        sparkline=sparkline,
        path=build_smooth_path(sparkline, width, height, tension=tension),
        area_path=build_area_path(sparkline, width, height, tension=tension),
        color_token=config.color_token,
        is_fallback=is_fallback,
    )


# ---------------------------------------------------------------------------
# Wellness journal summary
# ---------------------------------------------------------------------------

@dataclass
class WellnessMetricSummary:
    """Period statistics for one journal metric."""

    metric: str
    change: PeriodChange
    change_good: bool
    trend: TrendDirection
    sparkline: list[float] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "metric": self.metric,
            "avg": round(self.change.avg, 2),
            "previous_avg": round(self.change.previous_avg, 2),
            "change": round(self.change.delta, 2),
            "change_good": self.change_good,
            "trend": self.trend.value,
            "sparkline": [round(v, 2) for v in self.sparkline],
        }


@dataclass
class WellnessSummary:
    days: int
    metrics: dict[str, WellnessMetricSummary]
    vitality: int | None = None
    vitality_band: BandResult | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "days": self.days,
            "metrics": {name: m.as_dict() for name, m in self.metrics.items()},
            "vitality": self.vitality,
            "vitality_band": self.vitality_band.as_dict() if self.vitality_band else None,
        }


def _window(by_date: dict[str, dict], metric: str, end: date, days: int) -> list[float]:
    """Values for the ``days`` days ending at ``end``, oldest first; gaps skipped."""
    values: list[float] = []
    for offset in range(days - 1, -1, -1):
        log = by_date.get((end - timedelta(days=offset)).isoformat())
        if log is not None and log.get(metric) is not None:
            values.append(float(log[metric]))
    return values


def build_wellness_summary(
    logs: Sequence[dict],
    days: int = 30,
    *,
    today: date | None = None,
    display_points: int = CHART_DISPLAY_POINTS,
    noise_threshold: float = DEFAULT_NOISE_THRESHOLD,
) -> WellnessSummary:
    """Current period against the period before it, for each journal metric.

    ``logs`` are journal entries keyed by ISO ``date``. The vitality score
    comes from the most recent entry.
    """
    today = today or date.today()
    by_date = {log["date"]: log for log in logs}
    previous_end = today - timedelta(days=days)

    metrics: dict[str, WellnessMetricSummary] = {}
    for metric, higher_is_better in WELLNESS_METRICS.items():
        current = _window(by_date, metric, today, days)
        previous = _window(by_date, metric, previous_end, days)
        change = period_change(current, previous)
        change_good = change.delta >= 0 if higher_is_better else change.delta <= 0
        metrics[metric] = WellnessMetricSummary(
            metric=metric,
            change=change,
            change_good=change_good,
            trend=classify_trend(current, noise_threshold),
            sparkline=downsample(current, display_points),
        )

    summary = WellnessSummary(days=days, metrics=metrics)
    if logs:
        latest = max(logs, key=lambda log: log["date"])
        summary.vitality = vitality_score(
            latest["mood"], latest["energy"], latest["sleep_quality"], latest["stress"]
        )
        summary.vitality_band = vitality_band(summary.vitality)
    return summary
