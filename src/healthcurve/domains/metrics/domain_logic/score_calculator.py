"""Deterministic composite scores from small fixed sets of inputs.

Every function takes explicit arguments (no dynamic field lookup), clamps
its output into the documented range, and returns 0 / neutral for empty
windows instead of raising. Journal inputs (mood, energy, sleep quality,
stress) are clamped to the 1-10 slider scale at the boundary.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from healthcurve.domains.metrics.domain_logic.band_mapper import VITALITY_BANDS, map_to_band
from healthcurve.domains.metrics.domain_logic.metric_models import (
    DASS21_ANXIETY,
    DASS21_DEPRESSION,
    DASS21_STRESS,
    ERROR,
    INFO,
    JOURNAL_SCALE_MAX,
    JOURNAL_SCALE_MIN,
    SUCCESS,
    WARNING,
    BandResult,
    Dass21Thresholds,
    InvalidArgumentError,
    PeriodChange,
)


def _clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a value to [lo, hi]."""
    return max(lo, min(hi, value))


def _journal(value: float) -> float:
    return _clamp(float(value), JOURNAL_SCALE_MIN, JOURNAL_SCALE_MAX)


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


# ---------------------------------------------------------------------------
# Wellness journal scores
# ---------------------------------------------------------------------------

def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def vitality_score(mood: float, energy: float, sleep_quality: float, stress: float) -> int:
    """Vitality on a 0-100 scale.

    Stress is inverted as ``11 - stress`` so a 1-10 slider maps onto the
    same 1-10 range as the positive inputs. Halves round up.
    """
    total = _journal(mood) + _journal(energy) + _journal(sleep_quality) + (11 - _journal(stress))
    return _round_half_up(_clamp(total / 4 * 10, 0, 100))


def vitality_band(score: float) -> BandResult:
    """Optimal / High / Good / Moderate / Low."""
    return map_to_band(score, VITALITY_BANDS)


def wellness_score(mood: float, energy: float, sleep_quality: float, stress: float) -> float:
    """Heatmap score on a 0-10 scale.

    The positive average is weighted 70/30 against a stress-derived factor.
    """
    positive_avg = (_journal(mood) + _journal(energy) + _journal(sleep_quality)) / 3
    stress_factor = (10 - _journal(stress)) / 10
    return _clamp(positive_avg * (0.7 + stress_factor * 0.3), 0, 10)


def period_change(current_window: Sequence[float], previous_window: Sequence[float]) -> PeriodChange:
    """Average of the current window and its change against the previous one."""
    current_avg = _mean(current_window)
    previous_avg = _mean(previous_window)
    return PeriodChange(avg=current_avg, previous_avg=previous_avg, delta=current_avg - previous_avg)


# ---------------------------------------------------------------------------
# DASS-21
# ---------------------------------------------------------------------------

_DASS21_COLORS = {
    "Normal": SUCCESS,
    "Mild": INFO,
    "Moderate": WARNING,
    "Severe": ERROR,
}


def dass21_subscale_label(score: float, thresholds: Dass21Thresholds) -> str:
    """Normal / Mild / Moderate / Severe for one DASS-21 sub-scale."""
    if score < 0:
        raise InvalidArgumentError(f"DASS-21 scores are non-negative, got {score}")
    if score <= thresholds.normal:
        return "Normal"
    if score <= thresholds.mild:
        return "Mild"
    if score <= thresholds.moderate:
        return "Moderate"
    return "Severe"


def dass21_assessment(depression: float, anxiety: float, stress: float) -> dict[str, BandResult]:
    """Label all three sub-scales, each against its own thresholds."""
    results: dict[str, BandResult] = {}
    for name, score, thresholds in (
        ("depression", depression, DASS21_DEPRESSION),
        ("anxiety", anxiety, DASS21_ANXIETY),
        ("stress", stress, DASS21_STRESS),
    ):
        label = dass21_subscale_label(score, thresholds)
        results[name] = BandResult(label, _DASS21_COLORS[label])
    return results


# ---------------------------------------------------------------------------
# Target-relative status (cardiac panel badges)
# ---------------------------------------------------------------------------

_SEVERITY_ORDER = {SUCCESS: 0, WARNING: 1, ERROR: 2}


def target_status(value: float, target: float, higher_is_better: bool) -> BandResult:
    """Badge for a reading relative to its clinical target.

    Higher-is-bad: On Target / Elevated (within 20% over) / High.
    Higher-is-good: On Target / Low (within 20% under) / Very Low.
    """
    if not higher_is_better:
        if value <= target:
            return BandResult("On Target", SUCCESS)
        if value <= target * 1.2:
            return BandResult("Elevated", WARNING)
        return BandResult("High", ERROR)
    if value >= target:
        return BandResult("On Target", SUCCESS)
    if value >= target * 0.8:
        return BandResult("Low", WARNING)
    return BandResult("Very Low", ERROR)


def blood_pressure_status(
    systolic: float,
    diastolic: float,
    *,
    systolic_target: float = 120,
    diastolic_target: float = 80,
) -> BandResult:
    """Worse of the systolic and diastolic badges."""
    sys_status = target_status(systolic, systolic_target, higher_is_better=False)
    dia_status = target_status(diastolic, diastolic_target, higher_is_better=False)
    if _SEVERITY_ORDER[dia_status.color_token] > _SEVERITY_ORDER[sys_status.color_token]:
        return dia_status
    return sys_status


# ---------------------------------------------------------------------------
# Adherence-style 0-10 scores (journal history)
# ---------------------------------------------------------------------------

def nutrition_score(total_calories: float, target_calories: float) -> float:
    """Full marks within 10% of target, tapering for over- and under-eating."""
    if target_calories <= 0:
        return 0.0
    ratio = total_calories / target_calories
    if 0.9 <= ratio <= 1.1:
        return 10.0
    if 0.8 <= ratio <= 1.2:
        return 8.0
    if 0.7 <= ratio <= 1.3:
        return 6.0
    return _clamp(10 - abs(1 - ratio) * 10, 0, 10)


def activity_score(total_minutes: float, target_minutes: float) -> float:
    if target_minutes <= 0:
        return 0.0
    return _clamp(total_minutes / target_minutes * 10, 0, 10)


def medication_score(taken: int, total: int) -> float:
    # Nothing scheduled counts as fully adherent
    if total <= 0:
        return 10.0
    return _clamp(taken / total * 10, 0, 10)
