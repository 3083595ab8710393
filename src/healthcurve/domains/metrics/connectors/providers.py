"""Concrete MetricSeriesProvider implementations."""

from __future__ import annotations

from healthcurve.core.catalog.registry import MetricRegistry
from healthcurve.domains.metrics.connectors.mock_data import (
    get_mock_series,
    get_mock_wellness_logs,
)
from healthcurve.domains.metrics.domain_logic.metric_models import MetricSample


class MockMetricSeriesProvider:
    """Serves synthetic readings shaped by each metric's fallback settings.

    Sparse (imaging) metrics and unknown ids have no daily readings.
    """

    def __init__(self, registry: MetricRegistry) -> None:
        self._registry = registry

    async def get_series(self, metric_id: str, days: int = 365) -> list[MetricSample]:
        config = self._registry.get(metric_id)
        if config is None or config.is_sparse:
            return []
        rows = get_mock_series(
            config.fallback_base,
            config.fallback_variance,
            config.fallback_trend,
            days=days,
        )
        return [MetricSample(timestamp=r["timestamp"], value=r["value"]) for r in rows]

    async def get_wellness_logs(self, days: int = 60) -> list[dict]:
        return get_mock_wellness_logs(days)

    @property
    def data_source(self) -> str:
        return "mock"
