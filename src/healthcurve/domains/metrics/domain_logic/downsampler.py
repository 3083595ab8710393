"""Chunked-average downsampling to a fixed display resolution.

Chart width is fixed, so a year of daily readings and a single week must both
render at the same point count. Each output point is the mean of one
contiguous chunk of the input, which keeps the overall shape and trend.
"""

from __future__ import annotations

from collections.abc import Sequence

from healthcurve.domains.metrics.domain_logic.metric_models import (
    InvalidArgumentError,
    MetricSample,
)


def _chunk_bounds(length: int, target_points: int) -> list[tuple[int, int]]:
    """Return ``[start, end)`` index pairs for ``target_points`` chunks.

    Boundaries use floor division, so chunk sizes differ by at most one.
    """
    return [
        ((i * length) // target_points, ((i + 1) * length) // target_points)
        for i in range(target_points)
    ]


def downsample(series: Sequence[float], target_points: int) -> list[float]:
    """Reduce ``series`` to ``target_points`` values by chunk averaging.

    Series already at or below the target are returned unchanged (no
    upsampling).

    Raises:
        InvalidArgumentError: if ``target_points`` is not positive.
    """
    if target_points <= 0:
        raise InvalidArgumentError(f"target_points must be positive, got {target_points}")

    values = [float(v) for v in series]
    if len(values) <= target_points:
        return values

    return [
        sum(values[start:end]) / (end - start)
        for start, end in _chunk_bounds(len(values), target_points)
    ]


def downsample_samples(
    samples: Sequence[MetricSample], target_points: int
) -> list[MetricSample]:
    """Downsample timestamped samples; each chunk keeps its last timestamp."""
    if target_points <= 0:
        raise InvalidArgumentError(f"target_points must be positive, got {target_points}")

    if len(samples) <= target_points:
        return list(samples)

    result: list[MetricSample] = []
    for start, end in _chunk_bounds(len(samples), target_points):
        chunk = samples[start:end]
        avg = sum(s.value for s in chunk) / len(chunk)
        result.append(MetricSample(timestamp=chunk[-1].timestamp, value=avg))
    return result
