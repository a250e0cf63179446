"""Unit tests for the intensity contour and speaking-rate estimate"""

import numpy as np
import pytest

from mirror_accent.features.intensity import (
    count_syllable_peaks,
    estimate_speaking_rate,
    extract_intensity,
    moving_average,
)


class TestExtractIntensity:
    """Tests for per-frame RMS energy in decibels"""

    def test_constant_amplitude(self):
        """A constant 0.1 signal has RMS 0.1, i.e. -20 dB in every frame"""
        contour = extract_intensity(np.full(16000, 0.1), 16000)

        assert len(contour.values) == 98
        np.testing.assert_allclose(contour.values, -20.0, atol=1e-6)
        assert contour.mean == pytest.approx(-20.0, abs=1e-6)
        assert contour.range == pytest.approx(0.0, abs=1e-6)

    def test_silence_uses_epsilon_floor(self):
        contour = extract_intensity(np.zeros(16000), 16000)
        np.testing.assert_allclose(contour.values, -200.0)

    def test_range_and_mean(self):
        y = np.concatenate([np.full(8000, 0.01), np.full(8000, 1.0)])
        contour = extract_intensity(y, 16000)

        assert contour.range == pytest.approx(40.0, abs=1e-6)
        assert contour.mean == pytest.approx(np.mean(contour.values))

    def test_short_buffer_has_empty_contour(self):
        contour = extract_intensity(np.ones(100), 16000)
        assert len(contour.values) == 0
        assert contour.mean == 0.0
        assert contour.range == 0.0


class TestMovingAverage:
    """Tests for the centered, edge-truncated moving average"""

    def test_interior_and_edges(self):
        values = np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        smoothed = moving_average(values, 5)

        # Index 0 averages [0..2], index 1 [0..3], index 2 [0..4]
        np.testing.assert_allclose(smoothed, [2.0, 2.5, 3.0, 4.0, 4.5, 5.0])

    def test_empty(self):
        assert len(moving_average(np.array([]), 5)) == 0


class TestSpeakingRate:
    """Tests for envelope peak counting"""

    def test_counts_peaks_above_mean(self):
        # Three triangular bumps centred at 5, 15 and 25 on a silent floor
        values = np.zeros(30)
        for centre in (5, 15, 25):
            values[centre - 2:centre + 3] = [2.0, 6.0, 10.0, 6.0, 2.0]
        assert count_syllable_peaks(values) == 3

    def test_flat_envelope_has_no_peaks(self):
        assert count_syllable_peaks(np.full(50, -20.0)) == 0

    def test_peaks_below_mean_are_ignored(self):
        # The small bump is a strict smoothed maximum but sits below the mean
        values = np.array([20] * 5 + [0, 0, 1, 3, 5, 3, 1, 0, 0] + [20] * 5, dtype=float)
        assert count_syllable_peaks(values) == 0

    def test_amplitude_modulated_tone(self):
        """A 4 Hz amplitude-modulated tone produces about four peaks per second"""
        sr = 16000
        t = np.arange(2 * sr) / sr
        envelope = 0.5 * (1 - np.cos(2 * np.pi * 4 * t))
        y = 0.5 * envelope * np.sin(2 * np.pi * 200 * t)

        rate = estimate_speaking_rate(y, sr)

        assert rate.duration == pytest.approx(2.0)
        assert rate.syllables_per_second == pytest.approx(4.0, abs=0.6)
        assert rate.estimated_syllables == pytest.approx(rate.syllables_per_second * 2.0)

    def test_silence_has_zero_rate(self):
        rate = estimate_speaking_rate(np.zeros(16000), 16000)
        assert rate.estimated_syllables == 0
        assert rate.syllables_per_second == 0.0
