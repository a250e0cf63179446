"""
Сравнение просодии эталонной и пользовательской записей.
Каждое измерение оценивается в [0, 1], итоговая оценка - взвешенная сумма.
"""

from mirror_accent.constants import (
    DEFAULT_WEIGHTS,
    F1_NORMALIZER,
    F2_NORMALIZER,
    NEUTRAL_PITCH_RANGE_SCORE,
    PITCH_SPAN_NORMALIZER,
    RATE_NORMALIZER,
)
from mirror_accent.log import setup_logger
from mirror_accent.scoring.dtw import dtw_similarity, normalize
from mirror_accent.types import FeatureBundle, ScoreSet

log = setup_logger("prosody_scoring")


def clamp(value: float) -> float:
    return float(min(1.0, max(0.0, value)))


def formant_similarity(target: FeatureBundle, user: FeatureBundle) -> float:
    """Близость средних F1 и F2; F3 не оценивается."""
    f1 = 1 - min(1.0, abs(target.formants.f1.mean - user.formants.f1.mean) / F1_NORMALIZER)
    f2 = 1 - min(1.0, abs(target.formants.f2.mean - user.formants.f2.mean) / F2_NORMALIZER)
    return (f1 + f2) / 2


def speaking_rate_similarity(target: FeatureBundle, user: FeatureBundle) -> float:
    rate_diff = abs(
        target.speaking_rate.syllables_per_second - user.speaking_rate.syllables_per_second
    )
    return max(0.0, 1 - rate_diff / RATE_NORMALIZER)


def pitch_range_similarity(target: FeatureBundle, user: FeatureBundle) -> float:
    """Сходство размаха тона; без вокализованных фреймов у любой записи - нейтральные 0.5."""
    if target.pitch_range is None or user.pitch_range is None:
        return NEUTRAL_PITCH_RANGE_SCORE

    span_diff = abs(target.pitch_range.span - user.pitch_range.span)
    return max(0.0, 1 - span_diff / PITCH_SPAN_NORMALIZER)


def duration_similarity(target: FeatureBundle, user: FeatureBundle) -> float:
    """Отношение меньшей длительности к большей."""
    if target.duration <= 0 or user.duration <= 0:
        return 0.0
    return min(target.duration, user.duration) / max(target.duration, user.duration)


def compare_prosody(target: FeatureBundle, user: FeatureBundle,
                    weights: dict[str, float] | None = None) -> ScoreSet:
    """
    Вычисляет оценки сходства просодии по шести измерениям.

    Args:
        target: Признаки эталонной записи
        user: Признаки записи пользователя
        weights: Веса измерений для итоговой оценки (по умолчанию DEFAULT_WEIGHTS)

    Returns:
        ScoreSet, все значения в [0, 1]
    """
    weights = weights or DEFAULT_WEIGHTS

    scores = {
        'f0': dtw_similarity(target.f0.voiced, user.f0.voiced),
        'formants': formant_similarity(target, user),
        'intensity': dtw_similarity(
            normalize(target.intensity.values),
            normalize(user.intensity.values),
        ),
        'speaking_rate': speaking_rate_similarity(target, user),
        'pitch_range': pitch_range_similarity(target, user),
        'duration': duration_similarity(target, user),
    }
    scores = {name: clamp(value) for name, value in scores.items()}

    overall = sum(scores[name] * weights.get(name, 0.0) for name in scores)

    result = ScoreSet(overall=clamp(overall), **scores)
    log.debug('Оценки просодии: %s', result.as_dict())

    return result
