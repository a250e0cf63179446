"""Pytest configuration and fixtures"""

import io

import numpy as np
import pytest
import scipy.signal
import soundfile as sf
from hypothesis import settings, Verbosity

from mirror_accent.types import (
    F0Contour,
    FeatureBundle,
    FormantContour,
    FormantSeries,
    IntensityContour,
    PitchRange,
    SampleBuffer,
    SpeakingRate,
    frozen_array,
)

# Register Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20, verbosity=Verbosity.normal)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# Use CI profile by default
settings.load_profile("ci")


@pytest.fixture
def make_tone():
    """Factory for pure (optionally vibrato-modulated) sine buffers"""
    def _make(freq=150.0, duration=1.0, sample_rate=44100, amplitude=0.5, vibrato=0.0):
        t = np.arange(int(duration * sample_rate)) / sample_rate
        # Vibrato: +-vibrato Hz around freq at 3 Hz
        phase = 2 * np.pi * freq * t
        if vibrato:
            phase += (vibrato / 3.0) * np.sin(2 * np.pi * 3.0 * t)
        return SampleBuffer(samples=amplitude * np.sin(phase), sample_rate=sample_rate)
    return _make


@pytest.fixture
def make_vowel():
    """Factory for a synthetic vowel: glottal pulse train through formant resonators"""
    def _make(f0=120.0, formants=(700.0, 1220.0, 2600.0), bandwidths=(80.0, 90.0, 120.0),
              duration=0.5, sample_rate=16000):
        n = int(duration * sample_rate)
        excitation = np.zeros(n)
        excitation[::int(sample_rate / f0)] = 1.0

        y = excitation
        for freq, bw in zip(formants, bandwidths):
            r = np.exp(-np.pi * bw / sample_rate)
            theta = 2 * np.pi * freq / sample_rate
            y = scipy.signal.lfilter([1.0], [1.0, -2 * r * np.cos(theta), r * r], y)

        y = 0.5 * y / np.max(np.abs(y))
        return SampleBuffer(samples=y, sample_rate=sample_rate)
    return _make


@pytest.fixture
def make_bundle():
    """Factory for hand-built feature bundles (no signal processing involved)"""
    def _make(f0=(120.0, 130.0, 140.0, 130.0), f1_mean=500.0, f2_mean=1500.0,
              intensity=(-30.0, -20.0, -25.0, -35.0), duration=2.0, rate=4.0,
              pitch_range='auto'):
        f0_values = frozen_array(f0)
        times = frozen_array(np.arange(len(f0)) * 0.01)
        zeros = frozen_array(np.zeros(len(f0)))

        voiced = f0_values[f0_values > 0]
        if pitch_range == 'auto':
            pitch_range = PitchRange(
                min=float(np.min(voiced)), max=float(np.max(voiced)),
                mean=float(np.mean(voiced)), variance=float(np.var(voiced)),
            ) if len(voiced) else None

        intensity_values = frozen_array(intensity)
        return FeatureBundle(
            f0=F0Contour(values=f0_values, times=times),
            formants=FormantContour(
                f1=FormantSeries(values=zeros, mean=f1_mean),
                f2=FormantSeries(values=zeros, mean=f2_mean),
                f3=FormantSeries(values=zeros, mean=0.0),
                times=times,
            ),
            intensity=IntensityContour(
                values=intensity_values,
                times=frozen_array(np.arange(len(intensity)) * 0.01),
                mean=float(np.mean(intensity_values)) if len(intensity_values) else 0.0,
                range=float(np.ptp(intensity_values)) if len(intensity_values) else 0.0,
            ),
            duration=duration,
            speaking_rate=SpeakingRate(
                syllables_per_second=rate,
                estimated_syllables=int(rate * duration),
                duration=duration,
            ),
            pitch_range=pitch_range,
        )
    return _make


@pytest.fixture
def to_wav_bytes():
    """Encode a buffer (or a 2-D channel matrix) as WAV bytes"""
    def _encode(samples, sample_rate):
        out = io.BytesIO()
        sf.write(out, np.asarray(samples), sample_rate, format='WAV', subtype='PCM_16')
        return out.getvalue()
    return _encode
