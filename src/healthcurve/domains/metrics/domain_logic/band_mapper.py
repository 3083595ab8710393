"""Ordered threshold bands: scalar score -> (label, color token)."""

from __future__ import annotations

from collections.abc import Sequence

from healthcurve.domains.metrics.domain_logic.metric_models import (
    ERROR,
    INFO,
    POSITIVE,
    SUCCESS,
    WARNING,
    BandResult,
    InvalidArgumentError,
    ScoreBand,
)

# ---------------------------------------------------------------------------
# Band tables (sorted descending by threshold)
# ---------------------------------------------------------------------------

VITALITY_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(90, "Optimal", SUCCESS),
    ScoreBand(80, "High", POSITIVE),
    ScoreBand(60, "Good", INFO),
    ScoreBand(40, "Moderate", WARNING),
    ScoreBand(0, "Low", ERROR),
)

SCORE_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(90, "Optimal", SUCCESS),
    ScoreBand(80, "High", POSITIVE),
    ScoreBand(70, "Good", INFO),
    ScoreBand(60, "Fair", WARNING),
    ScoreBand(0, "Needs Work", ERROR),
)

# 7-tier gradient used by the journal history heatmap and timeline.
# Tokens name the tier; the presentation layer owns the actual gradient.
VITALITY_COLOR_TIERS: tuple[ScoreBand, ...] = (
    ScoreBand(90, "Excellent", "excellent"),
    ScoreBand(80, "Great", "great"),
    ScoreBand(70, "Good", "good"),
    ScoreBand(60, "Fair", "fair"),
    ScoreBand(50, "Needs Work", "needs-work"),
    ScoreBand(40, "Poor", "poor"),
    ScoreBand(0, "Critical", "critical"),
)

RISK_STATUS_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(70, "On Target", SUCCESS),
    ScoreBand(40, "Attention", WARNING),
    ScoreBand(0, "High Risk", ERROR),
)

_RISK_STATUS_LABELS: dict[str, BandResult] = {
    "optimal": BandResult("On Target", SUCCESS),
    "on-target": BandResult("On Target", SUCCESS),
    "attention": BandResult("Attention", WARNING),
    "alert": BandResult("High Risk", ERROR),
}

NO_DATA = BandResult("No Data", "transparent")


def validate_bands(bands: Sequence[ScoreBand]) -> None:
    """Reject empty tables and tables not strictly descending by threshold."""
    if not bands:
        raise InvalidArgumentError("Band table must contain at least one band")
    for higher, lower in zip(bands, bands[1:]):
        if lower.min_inclusive >= higher.min_inclusive:
            raise InvalidArgumentError(
                "Band table must be sorted descending by threshold: "
                f"{higher.label!r} ({higher.min_inclusive}) precedes "
                f"{lower.label!r} ({lower.min_inclusive})"
            )


def map_to_band(score: float, bands: Sequence[ScoreBand]) -> BandResult:
    """Return the first band whose minimum ``score`` meets.

    Scores below every minimum fall into the lowest band (the bottom is
    open-ended). The table is validated, never re-sorted.
    """
    validate_bands(bands)
    for band in bands:
        if score >= band.min_inclusive:
            return BandResult(band.label, band.color_token)
    lowest = bands[-1]
    return BandResult(lowest.label, lowest.color_token)


def band_rank(score: float, bands: Sequence[ScoreBand]) -> int:
    """Index of the matching band counted from the bottom (0 = lowest)."""
    validate_bands(bands)
    for i, band in enumerate(bands):
        if score >= band.min_inclusive:
            return len(bands) - 1 - i
    return 0


def heatmap_band(score: float | None) -> BandResult:
    """Heatmap cell for a 0-10 score; None means nothing was logged."""
    if score is None:
        return NO_DATA
    return map_to_band(score * 10, VITALITY_COLOR_TIERS)


def score_color(score: float, is_stress: bool = False) -> BandResult:
    """Color tier for an individual 0-10 journal score.

    Stress is inverted first so that high stress lands in a low tier.
    """
    normalized = (10 - score) * 10 if is_stress else score * 10
    return map_to_band(normalized, VITALITY_COLOR_TIERS)


def risk_status_band(status: str) -> BandResult:
    """Badge for a categorical risk status supplied by the fetch layer."""
    try:
        return _RISK_STATUS_LABELS[status]
    except KeyError:
        raise InvalidArgumentError(f"Unknown risk status: {status!r}") from None
