"""Shared test fixtures for healthcurve tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from healthcurve.core.catalog.loader import load_metric_directory  # noqa: E402
from healthcurve.core.catalog.registry import MetricRegistry  # noqa: E402
from healthcurve.core.config.settings import BUNDLED_CATALOG_DIR, Settings  # noqa: E402
from healthcurve.domains.metrics.connectors.providers import MockMetricSeriesProvider  # noqa: E402

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "METRIC_CATALOG_DIR",
        "DISPLAY_POINTS",
        "TREND_NOISE_THRESHOLD",
        "SPARSE_MIN_PERCENT_CHANGE",
        "CURVE_TENSION",
        "CHART_WIDTH",
        "CHART_HEIGHT",
        "HC_HOST",
        "HC_ALLOW_INSECURE_BIND",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def metric_registry() -> MetricRegistry:
    """Registry loaded from the bundled YAML catalog."""
    reg = MetricRegistry()
    load_metric_directory(BUNDLED_CATALOG_DIR, reg)
    return reg


@pytest.fixture
def mock_provider(metric_registry: MetricRegistry) -> MockMetricSeriesProvider:
    return MockMetricSeriesProvider(metric_registry)


@pytest.fixture
def settings() -> Settings:
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)
