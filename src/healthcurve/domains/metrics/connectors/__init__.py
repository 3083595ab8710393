"""Metric series connectors: the boundary to the external document store."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from healthcurve.domains.metrics.domain_logic.metric_models import MetricSample


@runtime_checkable
class MetricSeriesProvider(Protocol):
    """Abstract interface for already-materialized metric readings.

    Tools call these methods without knowing whether readings come from a
    document store, a wearable sync, or mock generators. Results may be
    unsorted; the engine orders them itself.
    """

    async def get_series(self, metric_id: str, days: int = 365) -> list[MetricSample]:
        """Readings for one metric over the last ``days`` days."""
        ...

    async def get_wellness_logs(self, days: int = 60) -> list[dict]:
        """Daily journal entries: date, mood, energy, stress, sleep_quality."""
        ...

    @property
    def data_source(self) -> str:
        """Label for the active data source, e.g. 'mock'."""
        ...
