"""Integration tests for the healthcurve MCP server."""

from __future__ import annotations

import asyncio
import json

import pytest
from fastmcp import Client

from healthcurve.core.catalog.models import MetricConfig
from healthcurve.core.catalog.registry import MetricRegistry
from healthcurve.core.server.app import create_app
from healthcurve.core.server.main import _is_loopback_host, run
from healthcurve.domains.metrics.domain_logic.metric_models import MetricSample


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _payload(result) -> dict:
    """Decode the JSON text block of a tool result."""
    blocks = getattr(result, "content", result)
    return json.loads(blocks[0].text)


ALL_EXPECTED_TOOLS = [
    "health_check",
    "metric_card",
    "vitality",
    "dass21",
    "blood_pressure",
    "trend_path",
    "wellness_trends",
    "list_metrics",
]


@pytest.fixture
def client(settings):
    """Create an MCP client connected to a server with the bundled catalog."""
    mcp = create_app(settings_override=settings)
    return Client(mcp)


def _call(client, tool: str, arguments: dict) -> dict:
    async def _go():
        async with client:
            return _payload(await client.call_tool(tool, arguments))
    return _run(_go())


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def test_server_starts_and_lists_tools(client):
    """Server should start and expose all registered tools."""
    async def _check():
        async with client:
            tools = await client.list_tools()
            tool_names = [t.name for t in tools]
            for expected in ALL_EXPECTED_TOOLS:
                assert expected in tool_names, f"Missing tool: {expected}"
    _run(_check())


def test_health_check_returns_ok(client):
    data = _call(client, "health_check", {})
    assert data["status"] == "ok"
    assert data["metrics_loaded"] > 0
    assert data["data_source"] == "mock"


def test_catalog_resource(client):
    async def _check():
        async with client:
            contents = await client.read_resource("metrics://catalog")
            data = json.loads(contents[0].text)
            assert "cardio" in data["categories"]
            assert data["metric_count"] > 0
    _run(_check())


def test_list_metrics_by_category(client):
    data = _call(client, "list_metrics", {"category": "sleep"})
    assert data["count"] == len(data["metrics"])
    assert all(m["category"] == "sleep" for m in data["metrics"])


# ---------------------------------------------------------------------------
# Metric cards
# ---------------------------------------------------------------------------

def test_metric_card_from_caller_values(client):
    data = _call(client, "metric_card", {"metric_id": "ldl", "values": [130, 125, 118, 110]})
    assert data["status"] == "ok"
    assert data["data_source"] == "caller"
    assert data["trend"] == "decreasing"
    assert data["trend_tone"] == "success"
    assert data["value"] == "110"


def test_metric_card_from_provider(client):
    data = _call(client, "metric_card", {"metric_id": "steps", "days": 90})
    assert data["data_source"] == "mock"
    assert len(data["sparkline"]) == 30
    assert data["is_fallback"] is False


def test_metric_card_unknown_metric(client):
    data = _call(client, "metric_card", {"metric_id": "nope"})
    assert data["status"] == "unknown_metric"


def test_metric_card_zero_day_window(client):
    data = _call(client, "metric_card", {"metric_id": "hrv", "days": 0})
    assert data["status"] == "invalid_argument"
    assert "days" in data["message"]


def test_metric_card_mismatched_timestamps(client):
    data = _call(
        client,
        "metric_card",
        {"metric_id": "ldl", "values": [1, 2, 3], "timestamps": ["2026-01-01"]},
    )
    assert data["status"] == "invalid_argument"


def test_metric_card_uses_injected_provider(settings):
    class _FixedProvider:
        async def get_series(self, metric_id: str, days: int = 365):
            return [
                MetricSample("2026-01-03", 30),
                MetricSample("2026-01-01", 10),
                MetricSample("2026-01-02", 20),
            ]

        async def get_wellness_logs(self, days: int = 60):
            return []

        @property
        def data_source(self) -> str:
            return "fixed"

    registry = MetricRegistry()
    registry.register(MetricConfig(id="hrv", label="HRV", category="cardio", unit="ms"))
    mcp = create_app(
        settings_override=settings,
        provider_override=_FixedProvider(),
        registry_override=registry,
    )
    data = _call(Client(mcp), "metric_card", {"metric_id": "hrv"})
    assert data["data_source"] == "fixed"
    assert data["sparkline"] == [10, 20, 30]
    assert data["trend"] == "increasing"


# ---------------------------------------------------------------------------
# Scores and paths
# ---------------------------------------------------------------------------

def test_vitality(client):
    data = _call(client, "vitality", {"mood": 8, "energy": 7, "sleep_quality": 9, "stress": 3})
    assert data["vitality"] == 80
    assert data["band"]["label"] == "High"


def test_dass21(client):
    data = _call(client, "dass21", {"depression": 10, "anxiety": 3, "stress": 30})
    assert data["subscales"]["depression"]["label"] == "Mild"
    assert data["subscales"]["stress"]["label"] == "Severe"


def test_dass21_negative_score(client):
    data = _call(client, "dass21", {"depression": -1, "anxiety": 3, "stress": 3})
    assert data["status"] == "invalid_argument"


def test_blood_pressure(client):
    data = _call(client, "blood_pressure", {"systolic": 118, "diastolic": 100})
    assert data["badge"]["label"] == "High"


def test_trend_path(client):
    data = _call(client, "trend_path", {"values": [0, 10], "width": 100, "height": 50,
                                        "min_val": 0, "max_val": 10})
    assert data["path"] == "M 0,50 C 25,50 75,0 100,0"
    assert data["area_path"].endswith("Z")


def test_trend_path_empty(client):
    data = _call(client, "trend_path", {"values": []})
    assert data["path"] == ""
    assert data["area_path"] == ""


@pytest.mark.parametrize("box", [{"width": 0}, {"height": 0}, {"width": -10}])
def test_trend_path_non_positive_box(client, box):
    data = _call(client, "trend_path", {"values": [1, 2, 3], **box})
    assert data["status"] == "invalid_argument"


def test_wellness_trends_zero_days(client):
    data = _call(client, "wellness_trends", {"days": 0})
    assert data["status"] == "invalid_argument"


def test_wellness_trends(client):
    data = _call(client, "wellness_trends", {"days": 14})
    assert data["days"] == 14
    assert set(data["metrics"]) == {"mood", "energy", "stress", "sleep_quality"}
    assert data["vitality"] is not None


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "host,expected",
    [("127.0.0.1", True), ("localhost", True), ("::1", True), ("0.0.0.0", False),
     ("example.com", False)],
)
def test_loopback_guard(host, expected):
    assert _is_loopback_host(host) is expected


def test_run_refuses_public_bind(monkeypatch):
    monkeypatch.setenv("HC_HOST", "0.0.0.0")
    with pytest.raises(RuntimeError, match="HC_ALLOW_INSECURE_BIND"):
        run()
