"""healthcurve MCP server: application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from healthcurve.core.catalog.loader import load_metric_directory
from healthcurve.core.catalog.registry import MetricRegistry
from healthcurve.core.config.settings import Settings, get_settings
from healthcurve.domains.metrics.connectors import MetricSeriesProvider
from healthcurve.domains.metrics.connectors.providers import MockMetricSeriesProvider
from healthcurve.domains.metrics.resources.catalog import register_metric_catalog_resources
from healthcurve.domains.metrics.tools.metric_tools import register_metric_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "healthcurve"
SERVER_VERSION = "0.1.0"


def create_app(
    *,
    settings_override: Settings | None = None,
    provider_override: MetricSeriesProvider | None = None,
    registry_override: MetricRegistry | None = None,
) -> FastMCP:
    """Create and configure the healthcurve MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Loads the metric catalog into a registry
    3. Initializes the metric series provider (mock unless overridden)
    4. Registers all tools and resources
    """
    settings = settings_override or get_settings()

    # --- Server instance ---
    server = FastMCP(
        "healthcurve",
        instructions=(
            "Health metric trend engine. Builds dashboard trend cards "
            "(downsampled sparklines, trend direction, smooth curve paths), "
            "vitality and DASS-21 scores, and status badges from "
            "already-fetched metric readings."
        ),
    )

    # --- Metric catalog ---
    if registry_override is not None:
        registry = registry_override
    else:
        registry = MetricRegistry()
        metric_count = load_metric_directory(settings.catalog_dir, registry)
        logger.info("Loaded %d metrics from %s", metric_count, settings.catalog_dir)

    # --- Series provider ---
    if provider_override is not None:
        provider = provider_override
    else:
        provider = MockMetricSeriesProvider(registry)
        logger.info("Using mock metric series provider")

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "metrics_loaded": len(registry),
            "categories": registry.categories(),
            "data_source": provider.data_source,
        }

    register_metric_tools(server, registry, provider, settings)
    logger.info("Metric tools registered")

    # --- Register resources ---
    register_metric_catalog_resources(server, registry)

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when accessed (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
