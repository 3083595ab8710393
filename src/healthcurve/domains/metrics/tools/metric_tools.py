"""MCP tools exposing the metric engine to dashboard clients.

Each tool resolves its configuration once (metric config from the registry,
chart parameters from settings), runs the pure engine functions, and
returns JSON for the rendering layer.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import date, timedelta
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

from healthcurve.domains.metrics.domain_logic.curve_path import (
    build_area_path,
    build_smooth_path,
)
from healthcurve.domains.metrics.domain_logic.metric_card import (
    build_metric_card,
    build_wellness_summary,
)
from healthcurve.domains.metrics.domain_logic.metric_models import (
    InvalidArgumentError,
    MetricSample,
)
from healthcurve.domains.metrics.domain_logic.score_calculator import (
    blood_pressure_status,
    dass21_assessment,
    vitality_band,
    vitality_score,
    wellness_score,
)

if TYPE_CHECKING:
    from healthcurve.core.catalog.registry import MetricRegistry
    from healthcurve.core.config.settings import Settings
    from healthcurve.domains.metrics.connectors import MetricSeriesProvider

logger = logging.getLogger(__name__)


def _invalid(exc: InvalidArgumentError) -> str:
    return json.dumps({"status": "invalid_argument", "message": str(exc)})


def _daily_stamps(count: int) -> list[str]:
    """One ISO date per value, oldest first, ending today."""
    today = date.today()
    return [(today - timedelta(days=count - 1 - i)).isoformat() for i in range(count)]


def register_metric_tools(
    mcp: FastMCP,
    registry: MetricRegistry,
    provider: MetricSeriesProvider,
    settings: Settings,
) -> None:
    """Register metric card and score tools on the MCP server."""

    @mcp.tool
    async def metric_card(
        ctx: Context,
        metric_id: str,
        values: list[float] | None = None,
        timestamps: list[str] | None = None,
        days: int = 365,
    ) -> str:
        """Build the trend card for one metric.

        When ``values`` are supplied they are used as the readings (paired
        with ``timestamps`` if given); otherwise readings come from the
        configured data source.

        Args:
            metric_id: Catalog id, e.g. 'ldl', 'rhr', 'sleep_score'.
            values: Optional raw readings.
            timestamps: Optional ISO timestamps, one per value.
            days: Look-back window when fetching from the data source.
        """
        start_time = time.monotonic()
        config = registry.get(metric_id)
        if config is None:
            return json.dumps({"status": "unknown_metric", "metric_id": metric_id})

        try:
            if values is not None:
                if timestamps is not None and len(timestamps) != len(values):
                    raise InvalidArgumentError("timestamps and values must have equal length")
                stamps = timestamps or _daily_stamps(len(values))
                samples = [MetricSample(timestamp=t, value=v) for t, v in zip(stamps, values)]
                source = "caller"
            else:
                if days <= 0:
                    raise InvalidArgumentError(f"days must be positive, got {days}")
                samples = await provider.get_series(metric_id, days=days)
                source = provider.data_source

            card = build_metric_card(
                config,
                samples,
                display_points=settings.display_points,
                sparse_min_percent=settings.sparse_min_percent_change,
                width=settings.chart_width,
                height=settings.chart_height,
                tension=settings.curve_tension,
            )
        except InvalidArgumentError as exc:
            return _invalid(exc)

        elapsed_ms = (time.monotonic() - start_time) * 1000
        logger.debug("metric_card %s built in %.1f ms", metric_id, elapsed_ms)
        return json.dumps({"status": "ok", "data_source": source, **card.as_dict()}, indent=2)

    @mcp.tool
    async def vitality(
        ctx: Context,
        mood: float,
        energy: float,
        sleep_quality: float,
        stress: float,
    ) -> str:
        """Vitality score (0-100) and band for one journal entry.

        Args:
            mood: 1-10.
            energy: 1-10.
            sleep_quality: 1-10.
            stress: 1-10 (higher is worse).
        """
        score = vitality_score(mood, energy, sleep_quality, stress)
        return json.dumps({
            "status": "ok",
            "vitality": score,
            "band": vitality_band(score).as_dict(),
            "wellness_score": round(wellness_score(mood, energy, sleep_quality, stress), 2),
        })

    @mcp.tool
    async def dass21(
        ctx: Context,
        depression: float,
        anxiety: float,
        stress: float,
    ) -> str:
        """Severity labels for a DASS-21 assessment (raw 0-42 sub-scale scores)."""
        try:
            results = dass21_assessment(depression, anxiety, stress)
        except InvalidArgumentError as exc:
            return _invalid(exc)
        return json.dumps({
            "status": "ok",
            "subscales": {name: band.as_dict() for name, band in results.items()},
        })

    @mcp.tool
    async def blood_pressure(
        ctx: Context,
        systolic: float,
        diastolic: float,
    ) -> str:
        """Status badge for a blood pressure reading against 120/80."""
        return json.dumps({
            "status": "ok",
            "badge": blood_pressure_status(systolic, diastolic).as_dict(),
        })

    @mcp.tool
    async def trend_path(
        ctx: Context,
        values: list[float],
        width: float | None = None,
        height: float | None = None,
        min_val: float | None = None,
        max_val: float | None = None,
    ) -> str:
        """Smooth curve and area paths for an arbitrary value series."""
        width = settings.chart_width if width is None else width
        height = settings.chart_height if height is None else height
        try:
            path = build_smooth_path(
                values, width, height, min_val, max_val, tension=settings.curve_tension
            )
            area = build_area_path(
                values, width, height, min_val, max_val, tension=settings.curve_tension
            )
        except InvalidArgumentError as exc:
            return _invalid(exc)
        return json.dumps({"status": "ok", "path": path, "area_path": area})

    @mcp.tool
    async def wellness_trends(ctx: Context, days: int = 30) -> str:
        """Period averages, changes and trends for the wellness journal.

        Args:
            days: Period length; the previous period of equal length is
                used for comparison.
        """
        if days <= 0:
            return _invalid(InvalidArgumentError(f"days must be positive, got {days}"))
        logs = await provider.get_wellness_logs(days=days * 2)
        summary = build_wellness_summary(
            logs,
            days,
            display_points=settings.display_points,
            noise_threshold=settings.trend_noise_threshold,
        )
        return json.dumps({"status": "ok", **summary.as_dict()}, indent=2)

    @mcp.tool
    def list_metrics(category: str | None = None) -> str:
        """List catalog metrics, optionally for a single category."""
        configs = registry.find_by_category(category) if category else registry.all()
        return json.dumps({
            "count": len(configs),
            "metrics": [c.as_dict() for c in configs],
        })
