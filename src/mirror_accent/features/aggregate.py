"""Сборка полного набора просодических признаков для одной записи."""

import numpy as np

from mirror_accent.constants import FORMANT_MAX_BANDWIDTH, VOICING_THRESHOLD
from mirror_accent.errors import InvalidAudioError
from mirror_accent.features.intensity import estimate_speaking_rate, extract_intensity
from mirror_accent.features.pitch import extract_f0_contour
from mirror_accent.log import setup_logger
from mirror_accent.models.formant import extract_formants
from mirror_accent.types import F0Contour, FeatureBundle, PitchRange, SampleBuffer

log = setup_logger('aggregate')


def validate_samples(buffer: SampleBuffer) -> np.ndarray:
    """
    Проверяет буфер и приводит отсчёты к одномерному float64-массиву.

    Raises:
        InvalidAudioError: Буфер пуст, не числовой, не одноканальный,
            содержит NaN/inf или имеет неположительную частоту дискретизации
    """
    try:
        y = np.asarray(buffer.samples, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidAudioError(f"Отсчёты не приводятся к числам: {exc}") from exc

    if y.ndim != 1:
        raise InvalidAudioError(f"Ожидался одноканальный сигнал, получена форма {y.shape}")
    if y.size == 0:
        raise InvalidAudioError("Пустой аудиобуфер")
    if not np.all(np.isfinite(y)):
        raise InvalidAudioError("Аудиобуфер содержит NaN или бесконечные значения")
    if buffer.sample_rate is None or buffer.sample_rate <= 0:
        raise InvalidAudioError(f"Некорректная частота дискретизации: {buffer.sample_rate}")

    return y


def compute_pitch_range(f0: F0Contour) -> PitchRange | None:
    """
    Статистика F0 только по вокализованным фреймам.

    Returns:
        PitchRange или None, если вокализованных фреймов нет
    """
    voiced = f0.voiced
    if len(voiced) == 0:
        return None

    return PitchRange(
        min=float(np.min(voiced)),
        max=float(np.max(voiced)),
        mean=float(np.mean(voiced)),
        variance=float(np.var(voiced)),
    )


def analyze_audio(buffer: SampleBuffer,
                  voicing_threshold: float = VOICING_THRESHOLD,
                  max_bandwidth: float = FORMANT_MAX_BANDWIDTH) -> FeatureBundle:
    """
    Извлекает все просодические признаки записи: F0, форманты,
    интенсивность, темп речи, длительность и диапазон тона.

    Args:
        buffer: Декодированный моно-буфер с частотой дискретизации
        voicing_threshold: Порог CMNDF для детектора основного тона
        max_bandwidth: Максимальная полоса пропускания форманты в Гц

    Returns:
        FeatureBundle

    Raises:
        InvalidAudioError: Буфер пуст или непригоден для анализа
    """
    y = validate_samples(buffer)
    sr = int(buffer.sample_rate)

    f0 = extract_f0_contour(y, sr, threshold=voicing_threshold)
    formants = extract_formants(y, sr, max_bandwidth=max_bandwidth)
    intensity = extract_intensity(y, sr)
    speaking_rate = estimate_speaking_rate(y, sr)

    bundle = FeatureBundle(
        f0=f0,
        formants=formants,
        intensity=intensity,
        duration=len(y) / sr,
        speaking_rate=speaking_rate,
        pitch_range=compute_pitch_range(f0),
    )

    log.debug(
        'Анализ завершён: %.2f с, %s фреймов, вокализовано %s',
        bundle.duration, bundle.frame_count, len(f0.voiced),
    )

    return bundle
