"""Data models for the metric catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from healthcurve.domains.metrics.domain_logic.metric_models import TrendDirection


@dataclass(frozen=True)
class MetricConfig:
    """Display and polarity settings for one metric.

    Resolved once at the call site and handed to the engine as a value;
    the engine never looks metrics up by id.
    """

    id: str
    label: str
    category: str
    unit: str = ""
    color_token: str = "neutral"
    higher_is_better: bool = True
    decimals: int = 0
    fallback_base: float = 50.0
    fallback_variance: float = 5.0
    fallback_trend: TrendDirection = TrendDirection.STABLE
    sparse_values: tuple[float, ...] = field(default_factory=tuple)

    @property
    def is_sparse(self) -> bool:
        return bool(self.sparse_values)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "category": self.category,
            "unit": self.unit,
            "color_token": self.color_token,
            "higher_is_better": self.higher_is_better,
            "decimals": self.decimals,
            "sparse": self.is_sparse,
        }
