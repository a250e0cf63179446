"""Сходство временных рядов на основе динамической трансформации времени (DTW)."""

import librosa
import numpy as np

from mirror_accent.constants import DTW_MAX_POINTS


def resample(values: np.ndarray, target_length: int) -> np.ndarray:
    """
    Линейная интерполяция ряда к target_length точкам.

    Исходный индекс i-й точки равен i·len/target_length, поэтому
    последняя точка исходного ряда при сжатии может не попасть в результат.
    """
    values = np.asarray(values, dtype=np.float64)
    if len(values) == target_length:
        return values

    source = np.arange(target_length) * (len(values) / target_length)
    lower = np.floor(source).astype(int)
    upper = np.minimum(lower + 1, len(values) - 1)
    frac = source - lower

    return values[lower] * (1 - frac) + values[upper] * frac


def normalize(values: np.ndarray) -> np.ndarray:
    """Min-max нормализация к [0, 1]; нулевой размах считается единичным."""
    values = np.asarray(values, dtype=np.float64)
    if len(values) == 0:
        return values

    low = np.min(values)
    span = np.max(values) - low
    if span == 0:
        span = 1.0

    return (values - low) / span


def dtw_cost(a: np.ndarray, b: np.ndarray) -> float:
    """Накопленная стоимость DTW-выравнивания с абсолютной разностью как ценой ячейки."""
    cost = np.abs(np.asarray(a, dtype=np.float64)[:, None] - np.asarray(b, dtype=np.float64)[None, :])
    accumulated = librosa.sequence.dtw(C=cost, backtrack=False)
    return float(accumulated[-1, -1])


def dtw_similarity(seq1, seq2, max_points: int = DTW_MAX_POINTS) -> float:
    """
    Сходство двух рядов в [0, 1] по стоимости DTW-выравнивания.

    Оба ряда сжимаются не более чем до max_points точек и нормализуются
    независимо; сходство равно 1 - min(1, cost / max(n, m)).

    Args:
        seq1: Первый ряд
        seq2: Второй ряд
        max_points: Предельная длина ряда после передискретизации

    Returns:
        Оценка сходства; 0 если хотя бы один ряд пуст
    """
    seq1 = np.asarray(seq1, dtype=np.float64)
    seq2 = np.asarray(seq2, dtype=np.float64)
    if len(seq1) == 0 or len(seq2) == 0:
        return 0.0

    n = min(len(seq1), max_points)
    m = min(len(seq2), max_points)

    s1 = normalize(resample(seq1, n))
    s2 = normalize(resample(seq2, m))

    similarity = 1 - min(1.0, dtw_cost(s1, s2) / max(n, m))
    return float(min(1.0, max(0.0, similarity)))
