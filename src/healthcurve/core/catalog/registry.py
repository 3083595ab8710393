"""Metric registry: in-memory index of loaded metric configs."""

from __future__ import annotations

import logging

from healthcurve.core.catalog.models import MetricConfig

logger = logging.getLogger(__name__)


class MetricRegistry:
    """In-memory registry of all loaded metric definitions."""

    def __init__(self) -> None:
        self._metrics: dict[str, MetricConfig] = {}
        self._by_category: dict[str, list[str]] = {}

    def register(self, config: MetricConfig) -> None:
        """Add a metric to all indexes."""
        if config.id in self._metrics:
            raise ValueError(f"Duplicate metric id registered: {config.id!r}")
        self._metrics[config.id] = config
        self._by_category.setdefault(config.category, []).append(config.id)

    def get(self, metric_id: str) -> MetricConfig | None:
        """Look up a metric by id."""
        return self._metrics.get(metric_id)

    def find_by_category(self, category: str) -> list[MetricConfig]:
        ids = self._by_category.get(category, [])
        return [self._metrics[mid] for mid in ids]

    def categories(self) -> list[str]:
        return list(self._by_category)

    def all(self) -> list[MetricConfig]:
        """Return all registered metrics."""
        return list(self._metrics.values())

    def __len__(self) -> int:
        return len(self._metrics)
