"""Огибающая энергии: контур интенсивности и оценка темпа речи."""

import numpy as np

from mirror_accent.constants import INTENSITY_EPSILON, RATE_SMOOTHING_WINDOW
from mirror_accent.features.framing import split_frames
from mirror_accent.log import setup_logger
from mirror_accent.types import IntensityContour, SpeakingRate, frozen_array

log = setup_logger('intensity')


def extract_intensity(y: np.ndarray, sample_rate: int) -> IntensityContour:
    """
    Извлекает контур интенсивности: RMS-энергия каждого фрейма в дБ.

    Args:
        y: Аудиосигнал
        sample_rate: Частота дискретизации

    Returns:
        IntensityContour со средним и динамическим диапазоном
    """
    frames, times = split_frames(y, sample_rate)

    rms = np.sqrt(np.mean(frames ** 2, axis=1)) if len(frames) else np.empty(0)
    values = 20 * np.log10(rms + INTENSITY_EPSILON)

    if len(values):
        mean = float(np.mean(values))
        dynamic_range = float(np.max(values) - np.min(values))
    else:
        mean, dynamic_range = 0.0, 0.0

    return IntensityContour(
        values=frozen_array(values),
        times=frozen_array(times),
        mean=mean,
        range=dynamic_range,
    )


def moving_average(values: np.ndarray, window: int = RATE_SMOOTHING_WINDOW) -> np.ndarray:
    """Центрированное скользящее среднее; у краёв окно усекается."""
    values = np.asarray(values, dtype=np.float64)
    n = len(values)
    if n == 0:
        return values.copy()

    half_left = window // 2
    half_right = (window + 1) // 2
    index = np.arange(n)
    start = np.maximum(0, index - half_left)
    end = np.minimum(n, index + half_right)

    cumulative = np.concatenate([[0.0], np.cumsum(values)])
    return (cumulative[end] - cumulative[start]) / (end - start)


def count_syllable_peaks(values: np.ndarray, window: int = RATE_SMOOTHING_WINDOW) -> int:
    """
    Считает ядра слогов: строгие локальные максимумы сглаженной огибающей,
    превышающие среднее несглаженного ряда.
    """
    values = np.asarray(values, dtype=np.float64)
    if len(values) < 3:
        return 0

    smoothed = moving_average(values, window)
    inner = smoothed[1:-1]
    peaks = (inner > smoothed[:-2]) & (inner > smoothed[2:]) & (inner > np.mean(values))

    return int(np.count_nonzero(peaks))


def estimate_speaking_rate(y: np.ndarray, sample_rate: int) -> SpeakingRate:
    """
    Оценивает темп речи по пикам огибающей интенсивности.

    Args:
        y: Аудиосигнал
        sample_rate: Частота дискретизации

    Returns:
        SpeakingRate: слогов в секунду, число слогов и длительность
    """
    intensity = extract_intensity(y, sample_rate)
    syllables = count_syllable_peaks(intensity.values)

    duration = len(y) / sample_rate if sample_rate > 0 else 0.0
    rate = syllables / duration if duration > 0 else 0.0

    log.debug('Темп: %s слогов за %.2f с', syllables, duration)

    return SpeakingRate(
        syllables_per_second=rate,
        estimated_syllables=syllables,
        duration=duration,
    )
