"""Metric catalog loader: reads YAML definitions from disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from healthcurve.core.catalog.models import MetricConfig
from healthcurve.core.catalog.registry import MetricRegistry
from healthcurve.domains.metrics.domain_logic.metric_models import TrendDirection

logger = logging.getLogger(__name__)

_TREND_ALIASES = {
    "up": TrendDirection.INCREASING,
    "down": TrendDirection.DECREASING,
    "stable": TrendDirection.STABLE,
}


def load_metric_directory(directory: str | Path, registry: MetricRegistry) -> int:
    """Load all YAML metric catalogs from a directory (recursively).

    Returns the number of metrics loaded.
    Skips files starting with underscore (like _schema.yaml).
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Metric catalog directory does not exist: %s", directory)
        return 0

    count = 0
    for path in sorted(directory.rglob("*.yaml")):
        if path.name.startswith("_"):
            continue
        try:
            configs = load_metric_file(path)
            for config in configs:
                registry.register(config)
            count += len(configs)
            logger.info("Loaded %d metrics from %s", len(configs), path.name)
        except Exception:
            logger.exception("Failed to load metric catalog from %s", path)
    return count


def load_metric_file(path: Path) -> list[MetricConfig]:
    """Parse one category file into MetricConfig rows."""
    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f)

    category = data["category"]
    return [_parse_metric(entry, category) for entry in data.get("metrics", [])]


def _parse_metric(entry: dict[str, Any], category: str) -> MetricConfig:
    trend = str(entry.get("fallback_trend", "stable")).lower()
    trend_dir = _TREND_ALIASES.get(trend) or TrendDirection(trend)

    return MetricConfig(
        id=entry["id"],
        label=entry["label"],
        category=category,
        unit=entry.get("unit", ""),
        color_token=entry.get("color", "neutral"),
        higher_is_better=bool(entry.get("higher_is_better", True)),
        decimals=int(entry.get("decimals", 0)),
        fallback_base=float(entry.get("fallback_base", 50.0)),
        fallback_variance=float(entry.get("fallback_variance", 5.0)),
        fallback_trend=trend_dir,
        sparse_values=tuple(float(v) for v in entry.get("sparse_values", [])),
    )
