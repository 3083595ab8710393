"""Property-based tests for the metric engine.

Each property holds for any valid input, not just the hand-picked cases in
the per-module tests.
"""

from __future__ import annotations

from hypothesis import assume, given
from hypothesis import strategies as st

from healthcurve.domains.metrics.domain_logic.band_mapper import (
    SCORE_BANDS,
    VITALITY_BANDS,
    VITALITY_COLOR_TIERS,
    band_rank,
)
from healthcurve.domains.metrics.domain_logic.curve_path import build_smooth_path
from healthcurve.domains.metrics.domain_logic.downsampler import downsample
from healthcurve.domains.metrics.domain_logic.metric_models import (
    DASS21_ANXIETY,
    DASS21_DEPRESSION,
    DASS21_STRESS,
    TrendDirection,
)
from healthcurve.domains.metrics.domain_logic.score_calculator import (
    dass21_subscale_label,
    vitality_score,
)
from healthcurve.domains.metrics.domain_logic.trend_classifier import classify_trend

_values = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
_series = st.lists(_values, max_size=200)


class TestDownsampleProperties:
    @given(series=_series, target=st.integers(min_value=1, max_value=60))
    def test_length_invariant(self, series: list[float], target: int) -> None:
        result = downsample(series, target)
        if len(series) > target:
            assert len(result) == target
        else:
            assert result == series

    @given(
        chunk=st.integers(min_value=2, max_value=6),
        target=st.integers(min_value=1, max_value=20),
        data=st.data(),
    )
    def test_even_chunks_preserve_mean(self, chunk: int, target: int, data) -> None:
        series = data.draw(
            st.lists(
                st.floats(min_value=0, max_value=1000),
                min_size=chunk * target,
                max_size=chunk * target,
            )
        )
        result = downsample(series, target)
        in_mean = sum(series) / len(series)
        out_mean = sum(result) / len(result)
        assert abs(in_mean - out_mean) < 1e-6

    @given(series=st.lists(st.floats(min_value=0, max_value=1000), min_size=1, max_size=200),
           target=st.integers(min_value=1, max_value=60))
    def test_output_stays_within_input_range(self, series: list[float], target: int) -> None:
        result = downsample(series, target)
        lo, hi = min(series), max(series)
        assert all(lo - 1e-9 <= v <= hi + 1e-9 for v in result)


class TestTrendProperties:
    @given(
        start=st.floats(min_value=-1000, max_value=1000),
        steps=st.lists(st.floats(min_value=0.01, max_value=10), min_size=13, max_size=60),
        threshold=st.floats(min_value=0, max_value=5),
    )
    def test_reversal_flips_direction(self, start: float, steps: list[float], threshold: float) -> None:
        series = [start]
        for step in steps:
            series.append(series[-1] + step)
        assume(all(b > a for a, b in zip(series, series[1:])))

        forward = classify_trend(series, threshold)
        backward = classify_trend(list(reversed(series)), threshold)
        if forward == TrendDirection.INCREASING:
            assert backward == TrendDirection.DECREASING
        else:
            assert forward == backward == TrendDirection.STABLE


class TestScoreProperties:
    _journal = st.floats(min_value=-50, max_value=50, allow_nan=False)

    @given(mood=_journal, energy=_journal, sleep=_journal, stress=_journal)
    def test_vitality_bounded(self, mood: float, energy: float, sleep: float, stress: float) -> None:
        assert 0 <= vitality_score(mood, energy, sleep, stress) <= 100

    @given(score=st.floats(min_value=0, max_value=1000, allow_nan=False))
    def test_dass21_always_one_of_four(self, score: float) -> None:
        for thresholds in (DASS21_DEPRESSION, DASS21_ANXIETY, DASS21_STRESS):
            assert dass21_subscale_label(score, thresholds) in {
                "Normal", "Mild", "Moderate", "Severe",
            }


class TestBandProperties:
    @given(
        a=st.floats(min_value=-100, max_value=200, allow_nan=False),
        b=st.floats(min_value=-100, max_value=200, allow_nan=False),
    )
    def test_rank_monotonic_in_score(self, a: float, b: float) -> None:
        lo, hi = sorted((a, b))
        for table in (VITALITY_BANDS, SCORE_BANDS, VITALITY_COLOR_TIERS):
            assert band_rank(lo, table) <= band_rank(hi, table)


class TestCurveProperties:
    @given(
        values=_series,
        width=st.floats(min_value=1, max_value=2000),
        height=st.floats(min_value=1, max_value=2000),
    )
    def test_smooth_path_is_deterministic(self, values: list[float], width: float, height: float) -> None:
        assert build_smooth_path(values, width, height) == build_smooth_path(values, width, height)
