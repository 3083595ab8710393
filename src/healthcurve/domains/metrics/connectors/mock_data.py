"""Synthetic metric data for demo mode and tests.

Nothing here is part of the engine. Fallback series are only used when a
metric has no real readings, and cards built from them are flagged
``is_fallback`` so they are never mistaken for computed results.

Noise comes from a sine-based hash of the point index rather than a random
generator, so the same inputs always produce the same series.
"""

from __future__ import annotations

import math
from datetime import date, timedelta

from healthcurve.domains.metrics.domain_logic.metric_models import (
    CHART_DISPLAY_POINTS,
    TrendDirection,
)


def seeded_noise(index: int, offset: int = 0) -> float:
    """Deterministic pseudo-random value in [-0.5, 0.5)."""
    seed = math.sin((index + offset) * 12.9898) * 43758.5453
    return seed - math.floor(seed) - 0.5


def generate_fallback_series(
    base: float,
    variance: float,
    trend: TrendDirection = TrendDirection.STABLE,
    points: int = CHART_DISPLAY_POINTS,
) -> list[float]:
    """Drifting demo series centred on ``base``.

    An upward trend starts ``variance`` below base and climbs ``2 * variance``
    over the series; downward mirrors it; stable only wanders.
    """
    if points <= 0:
        return []

    step = 0.0
    start = base
    if trend == TrendDirection.INCREASING:
        step = variance * 2 / points
        start = base - variance
    elif trend == TrendDirection.DECREASING:
        step = -variance * 2 / points
        start = base + variance

    data: list[float] = []
    current = start
    for i in range(points):
        current += step + seeded_noise(i) * variance * 0.4
        data.append(round(current, 2))
    return data


def get_mock_wellness_logs(days: int = 60, end: date | None = None) -> list[dict]:
    """Daily journal entries ending at ``end`` (default: today).

    Mood and energy improve slowly across the window; stress eases.
    """
    end = end or date.today()
    logs: list[dict] = []
    for i in range(days):
        day = end - timedelta(days=days - 1 - i)
        progress = i / max(days - 1, 1)
        logs.append({
            "date": day.isoformat(),
            "mood": _slider(6 + progress * 2 + seeded_noise(i) * 1.5),
            "energy": _slider(5.5 + progress * 2 + seeded_noise(i, 37) * 1.5),
            "stress": _slider(5 - progress * 2 + seeded_noise(i, 71) * 1.5),
            "sleep_quality": _slider(6.5 + progress + seeded_noise(i, 113) * 1.5),
        })
    return logs


def get_mock_series(
    base: float,
    variance: float,
    trend: TrendDirection = TrendDirection.STABLE,
    days: int = 90,
    end: date | None = None,
) -> list[dict]:
    """Daily ``{timestamp, value}`` readings ending at ``end`` (default: today)."""
    end = end or date.today()
    values = generate_fallback_series(base, variance, trend, points=days)
    return [
        {"timestamp": (end - timedelta(days=days - 1 - i)).isoformat(), "value": v}
        for i, v in enumerate(values)
    ]


def _slider(value: float) -> int:
    return int(max(1, min(10, round(value))))
