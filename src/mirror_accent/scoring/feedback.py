"""Текстовые рекомендации по результатам сравнения просодии."""

from mirror_accent.constants import (
    FEEDBACK_THRESHOLD,
    PITCH_HIGH_RATIO,
    PITCH_LOW_RATIO,
    PITCH_SPAN_RATIO,
    RATE_FAST_RATIO,
    RATE_SLOW_RATIO,
)
from mirror_accent.types import FeatureBundle, ScoreSet

PITCH_TOO_LOW = 'Try speaking with a slightly higher pitch to match the target accent.'
PITCH_TOO_HIGH = 'Your pitch is higher than the target. Try lowering it slightly.'
PITCH_RANGE_NARROW = 'Add more variation to your intonation - the target has a wider pitch range.'
RESONANCE = 'Focus on vowel sounds - the resonance differs from the target accent.'
RATE_TOO_SLOW = 'Try speaking a bit faster to match the natural rhythm of this accent.'
RATE_TOO_FAST = 'Slow down slightly - take more time with each syllable.'
STRESS = 'Pay attention to stress patterns - vary your emphasis on different syllables.'
INTONATION = 'Work on your intonation patterns - try to match the melodic contour of the accent.'
GREAT_WORK = 'Great work! Keep practicing to maintain consistency.'


def _pitch_feedback(target: FeatureBundle, user: FeatureBundle) -> list[str]:
    target_range, user_range = target.pitch_range, user.pitch_range
    if target_range is None or user_range is None:
        return []

    messages = []
    if user_range.mean < target_range.mean * PITCH_LOW_RATIO:
        messages.append(PITCH_TOO_LOW)
    elif user_range.mean > target_range.mean * PITCH_HIGH_RATIO:
        messages.append(PITCH_TOO_HIGH)

    if user_range.span < target_range.span * PITCH_SPAN_RATIO:
        messages.append(PITCH_RANGE_NARROW)

    return messages


def _rate_feedback(target: FeatureBundle, user: FeatureBundle) -> list[str]:
    target_rate = target.speaking_rate.syllables_per_second
    user_rate = user.speaking_rate.syllables_per_second

    if user_rate < target_rate * RATE_SLOW_RATIO:
        return [RATE_TOO_SLOW]
    if user_rate > target_rate * RATE_FAST_RATIO:
        return [RATE_TOO_FAST]
    return []


def generate_feedback(scores: ScoreSet, target: FeatureBundle, user: FeatureBundle,
                      threshold: float = FEEDBACK_THRESHOLD) -> list[str]:
    """
    Формирует рекомендации в фиксированном порядке проверок:
    тон, резонанс (гласные), темп, ударения, интонация.

    Args:
        scores: Оценки сравнения
        target: Признаки эталонной записи
        user: Признаки записи пользователя
        threshold: Оценка ниже порога порождает рекомендацию

    Returns:
        Список сообщений; если ни одно измерение не ниже порога - одно одобрительное
    """
    feedback = []

    if scores.f0 < threshold:
        feedback.extend(_pitch_feedback(target, user))

    if scores.formants < threshold:
        feedback.append(RESONANCE)

    if scores.speaking_rate < threshold:
        feedback.extend(_rate_feedback(target, user))

    if scores.intensity < threshold:
        feedback.append(STRESS)

    if scores.pitch_range < threshold:
        feedback.append(INTONATION)

    if not feedback:
        feedback.append(GREAT_WORK)

    return feedback
