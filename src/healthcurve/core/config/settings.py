"""Application settings loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

# Bundled metric catalog YAML lives under src/healthcurve/domains/metrics/catalog/
BUNDLED_CATALOG_DIR = Path(__file__).resolve().parent.parent.parent / "domains" / "metrics" / "catalog"


class Settings(BaseSettings):
    """healthcurve server and chart configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Default to loopback; there is no auth layer in front of the tools.
    hc_host: str = "127.0.0.1"
    hc_port: int = 8001
    hc_log_level: str = "info"
    hc_allow_insecure_bind: bool = False

    # Chart / engine parameters
    display_points: int = Field(default=30, gt=0)
    trend_noise_threshold: float = Field(default=0.3, ge=0.0)
    sparse_min_percent_change: float = Field(default=2.0, ge=0.0)
    curve_tension: float = Field(default=0.25, ge=0.0, le=1.0)
    chart_width: int = Field(default=300, gt=0)
    chart_height: int = Field(default=80, gt=0)

    # Metric catalog (empty = bundled YAML)
    metric_catalog_dir: str = ""

    @property
    def catalog_dir(self) -> Path:
        if self.metric_catalog_dir:
            return Path(self.metric_catalog_dir).expanduser()
        return BUNDLED_CATALOG_DIR


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
