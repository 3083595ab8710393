"""MCP Resources for metric catalog discovery."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from fastmcp import FastMCP

if TYPE_CHECKING:
    from healthcurve.core.catalog.registry import MetricRegistry


def register_metric_catalog_resources(mcp: FastMCP, registry: MetricRegistry) -> None:
    """Register metric catalog discovery resources on the MCP server."""

    @mcp.resource("metrics://catalog")
    def metric_catalog_resource() -> str:
        """Discover all configured metrics, grouped by category."""
        return json.dumps(
            {
                "metric_count": len(registry),
                "categories": {
                    category: [c.as_dict() for c in registry.find_by_category(category)]
                    for category in registry.categories()
                },
            },
            indent=2,
        )
