"""Unit tests for per-dimension prosody scores"""

import pytest

from mirror_accent.constants import DEFAULT_WEIGHTS, NEUTRAL_PITCH_RANGE_SCORE
from mirror_accent.scoring.prosody import (
    clamp,
    compare_prosody,
    duration_similarity,
    formant_similarity,
    pitch_range_similarity,
    speaking_rate_similarity,
)


class TestDimensionScores:
    """Tests for the scalar similarity formulas"""

    def test_clamp(self):
        assert clamp(-0.2) == 0.0
        assert clamp(1.7) == 1.0
        assert clamp(0.4) == 0.4

    def test_duration_ratio(self, make_bundle):
        """2 s against 4 s gives exactly 0.5, in either order"""
        short, long = make_bundle(duration=2.0), make_bundle(duration=4.0)
        assert duration_similarity(short, long) == 0.5
        assert duration_similarity(long, short) == 0.5

    def test_zero_duration(self, make_bundle):
        assert duration_similarity(make_bundle(duration=0.0), make_bundle()) == 0.0

    def test_formants_average_f1_and_f2(self, make_bundle):
        target = make_bundle(f1_mean=500.0, f2_mean=1500.0)
        user = make_bundle(f1_mean=750.0, f2_mean=1500.0)
        # F1 term 1 - 250/500 = 0.5, F2 term 1
        assert formant_similarity(target, user) == pytest.approx(0.75)

    def test_formant_terms_saturate(self, make_bundle):
        target = make_bundle(f1_mean=300.0, f2_mean=900.0)
        user = make_bundle(f1_mean=1300.0, f2_mean=2900.0)
        assert formant_similarity(target, user) == 0.0

    def test_speaking_rate(self, make_bundle):
        assert speaking_rate_similarity(make_bundle(rate=4.0), make_bundle(rate=5.5)) == pytest.approx(0.5)
        assert speaking_rate_similarity(make_bundle(rate=1.0), make_bundle(rate=6.0)) == 0.0

    def test_pitch_range_span(self, make_bundle):
        target = make_bundle(f0=(120.0, 140.0))
        user = make_bundle(f0=(100.0, 200.0))
        # Spans 20 Hz and 100 Hz
        assert pitch_range_similarity(target, user) == pytest.approx(0.2)

    def test_pitch_range_neutral_without_voicing(self, make_bundle):
        silent = make_bundle(f0=(0.0, 0.0, 0.0, 0.0))
        assert silent.pitch_range is None
        assert pitch_range_similarity(silent, make_bundle()) == NEUTRAL_PITCH_RANGE_SCORE
        assert pitch_range_similarity(make_bundle(), silent) == NEUTRAL_PITCH_RANGE_SCORE


class TestCompareProsody:
    """Tests for the combined score set"""

    def test_identical_bundles_score_one(self, make_bundle):
        bundle = make_bundle()
        scores = compare_prosody(bundle, bundle)

        for name, value in scores.as_dict().items():
            assert value == pytest.approx(1.0), name

    def test_unvoiced_user_gets_zero_f0(self, make_bundle):
        scores = compare_prosody(make_bundle(), make_bundle(f0=(0.0, 0.0, 0.0, 0.0)))

        assert scores.f0 == 0.0
        assert scores.pitch_range == NEUTRAL_PITCH_RANGE_SCORE

    def test_overall_is_weighted_sum(self, make_bundle):
        target = make_bundle(duration=2.0, rate=4.0, f1_mean=500.0)
        user = make_bundle(duration=3.0, rate=5.0, f1_mean=600.0)

        scores = compare_prosody(target, user)

        expected = sum(scores.as_dict()[name] * weight for name, weight in DEFAULT_WEIGHTS.items())
        assert scores.overall == pytest.approx(expected)

    def test_custom_weights(self, make_bundle):
        scores = compare_prosody(make_bundle(duration=2.0), make_bundle(duration=4.0), weights={'duration': 1.0})
        assert scores.overall == pytest.approx(0.5)

    def test_all_scores_in_unit_interval(self, make_bundle):
        target = make_bundle(f0=(100.0, 300.0, 0.0, 250.0), intensity=(-60.0, -10.0, -40.0, -20.0))
        user = make_bundle(f0=(90.0, 0.0, 95.0), intensity=(-5.0, -80.0, -30.0), duration=9.0, rate=0.5)

        for value in compare_prosody(target, user).as_dict().values():
            assert 0.0 <= value <= 1.0

    def test_default_weights_sum_to_one(self):
        assert sum(DEFAULT_WEIGHTS.values()) == pytest.approx(1.0)
