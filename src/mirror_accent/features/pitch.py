"""Извлечение контура основного тона (F0) алгоритмом YIN."""

import librosa
import numpy as np

from mirror_accent.constants import PITCH_FMAX, PITCH_FMIN, VOICING_THRESHOLD
from mirror_accent.features.framing import split_frames
from mirror_accent.log import setup_logger
from mirror_accent.types import F0Contour, frozen_array

log = setup_logger('pitch')


def cumulative_mean_normalized_difference(frames: np.ndarray, max_lag: int) -> np.ndarray:
    """
    Вычисляет нормированную кумулятивным средним разностную функцию (CMNDF)
    для каждого фрейма.

    Разностная функция d(τ) = Σ (x[i] - x[i+τ])² раскладывается на энергии
    двух перекрывающихся частей фрейма и автокорреляцию, которая считается
    через FFT (librosa.autocorrelate).

    Args:
        frames: Матрица фреймов (n_frames, frame_length)
        max_lag: Верхняя граница лагов (не включительно)

    Returns:
        Матрица (n_frames, max_lag) со значениями CMNDF, CMNDF[:, 0] = 1
    """
    n_frames, frame_length = frames.shape
    max_lag = min(max_lag, frame_length)
    cmndf = np.ones((n_frames, max_lag))
    if n_frames == 0 or max_lag < 2:
        return cmndf

    lags = np.arange(1, max_lag)
    autocorr = librosa.autocorrelate(frames, max_size=max_lag, axis=-1)

    energy = np.concatenate(
        [np.zeros((n_frames, 1)), np.cumsum(frames ** 2, axis=1)], axis=1
    )
    head_energy = energy[:, frame_length - lags]
    tail_energy = energy[:, frame_length:frame_length + 1] - energy[:, lags]

    diff = np.maximum(head_energy + tail_energy - 2.0 * autocorr[:, 1:], 0.0)

    running_mean = np.cumsum(diff, axis=1) / lags
    # Нулевое среднее (тишина) не даёт кандидата: оставляем CMNDF = 1
    valid = running_mean > 0
    cmndf[:, 1:][valid] = diff[valid] / running_mean[valid]

    return cmndf


def pick_period(cmndf: np.ndarray, min_lag: int, max_lag: int, threshold: float) -> float:
    """
    Ищет период по CMNDF одного фрейма.

    Первый лаг не меньше min_lag со значением ниже порога считается кандидатом;
    затем спускаемся до локального минимума и уточняем лаг параболической
    интерполяцией.

    Args:
        cmndf: CMNDF одного фрейма
        min_lag: Минимальный лаг (sample_rate / fmax)
        max_lag: Максимальный лаг (sample_rate / fmin)
        threshold: Абсолютный порог вокализации

    Returns:
        Уточнённый лаг в отсчётах или 0.0 для невокализованного фрейма
    """
    max_lag = min(max_lag, len(cmndf))
    if min_lag >= max_lag - 1:
        return 0.0

    candidates = np.flatnonzero(cmndf[min_lag:max_lag - 1] < threshold)
    if len(candidates) == 0:
        return 0.0

    tau = min_lag + int(candidates[0])
    while tau + 1 < max_lag and cmndf[tau + 1] < cmndf[tau]:
        tau += 1

    if tau >= max_lag - 1:
        return 0.0

    s0, s1, s2 = cmndf[tau - 1], cmndf[tau], cmndf[tau + 1]
    denominator = 2.0 * (2.0 * s1 - s2 - s0)
    if denominator == 0:
        return float(tau)

    return tau + (s2 - s0) / denominator


def extract_f0_contour(y: np.ndarray, sample_rate: int,
                       threshold: float = VOICING_THRESHOLD,
                       fmin: float = PITCH_FMIN,
                       fmax: float = PITCH_FMAX) -> F0Contour:
    """
    Извлекает контур основного тона: одно значение F0 на фрейм 25 мс с шагом 10 мс.

    Args:
        y: Аудиосигнал
        sample_rate: Частота дискретизации
        threshold: Порог CMNDF для признания фрейма вокализованным
        fmin: Нижняя граница поиска F0 в Гц
        fmax: Верхняя граница поиска F0 в Гц

    Returns:
        F0Contour, где 0 обозначает невокализованный фрейм
    """
    frames, times = split_frames(y, sample_rate)

    min_lag = max(1, int(sample_rate / fmax))
    max_lag = int(sample_rate / fmin)

    cmndf = cumulative_mean_normalized_difference(frames, max_lag)

    f0_values = np.zeros(len(frames))
    for i in range(len(frames)):
        period = pick_period(cmndf[i], min_lag, max_lag, threshold)
        if period > 0:
            f0_values[i] = sample_rate / period

    log.debug('F0: %s фреймов, вокализовано %s', len(f0_values), int(np.count_nonzero(f0_values)))

    return F0Contour(values=frozen_array(f0_values), times=frozen_array(times))
