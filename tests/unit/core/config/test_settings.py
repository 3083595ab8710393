"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from healthcurve.core.config.settings import BUNDLED_CATALOG_DIR, Settings


def test_defaults(settings):
    assert settings.hc_host == "127.0.0.1"
    assert settings.display_points == 30
    assert settings.trend_noise_threshold == 0.3
    assert settings.sparse_min_percent_change == 2.0
    assert settings.curve_tension == 0.25
    assert (settings.chart_width, settings.chart_height) == (300, 80)


def test_bundled_catalog_by_default(settings):
    assert settings.catalog_dir == BUNDLED_CATALOG_DIR
    assert any(BUNDLED_CATALOG_DIR.glob("*.yaml"))


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DISPLAY_POINTS", "20")
    monkeypatch.setenv("CURVE_TENSION", "0.4")
    monkeypatch.setenv("METRIC_CATALOG_DIR", "/tmp/metrics")
    s = Settings(_env_file=None)
    assert s.display_points == 20
    assert s.curve_tension == 0.4
    assert str(s.catalog_dir) == "/tmp/metrics"


@pytest.mark.parametrize(
    "name,value",
    [("DISPLAY_POINTS", "0"), ("CURVE_TENSION", "1.5"), ("TREND_NOISE_THRESHOLD", "-1")],
)
def test_invalid_values_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
