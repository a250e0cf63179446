"""Полный цикл сравнения: декодирование, анализ двух записей, оценки и рекомендации."""

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass

from mirror_accent.config import settings
from mirror_accent.errors import MirrorAccentError
from mirror_accent.features.aggregate import analyze_audio
from mirror_accent.log import setup_logger
from mirror_accent.scoring.feedback import generate_feedback
from mirror_accent.scoring.prosody import compare_prosody
from mirror_accent.services.decoding import decode_audio
from mirror_accent.types import FeatureBundle, SampleBuffer, ScoreSet, freeze_arrays

log = setup_logger('comparison')


@dataclass(frozen=True)
class ComparisonReport:
    scores: ScoreSet
    feedback: list[str]
    target: FeatureBundle
    user: FeatureBundle


def as_buffer(audio: SampleBuffer | bytes) -> SampleBuffer:
    """Байты декодируются, готовый буфер возвращается как есть."""
    if isinstance(audio, SampleBuffer):
        return audio
    return decode_audio(audio)


def analyze_pair(target: SampleBuffer, user: SampleBuffer,
                 workers: int | None = None) -> tuple[FeatureBundle, FeatureBundle]:
    """
    Анализирует эталон и попытку пользователя.

    Анализы независимы, поэтому при workers > 1 выполняются в отдельных
    процессах; результат возвращается, когда готовы оба.

    Args:
        target: Эталонная запись
        user: Запись пользователя
        workers: Число процессов (по умолчанию settings.analysis_workers)

    Returns:
        (target_bundle, user_bundle)
    """
    workers = settings.analysis_workers if workers is None else workers
    options = {
        'voicing_threshold': settings.voicing_threshold,
        'max_bandwidth': settings.formant_max_bandwidth,
    }

    if workers <= 1:
        return analyze_audio(target, **options), analyze_audio(user, **options)

    with ProcessPoolExecutor(max_workers=min(workers, 2)) as executor:
        target_future = executor.submit(analyze_audio, target, **options)
        user_future = executor.submit(analyze_audio, user, **options)
        return freeze_arrays(target_future.result()), freeze_arrays(user_future.result())


def compare_recordings(target: SampleBuffer | bytes, user: SampleBuffer | bytes,
                       workers: int | None = None) -> ComparisonReport:
    """
    Сравнивает просодию двух записей одного текста.

    Args:
        target: Эталонная запись (буфер или закодированные байты)
        user: Запись пользователя (буфер или закодированные байты)
        workers: Число процессов для анализа

    Returns:
        ComparisonReport с оценками, рекомендациями и признаками обеих записей

    Raises:
        DecodeError: Байты не декодируются
        InvalidAudioError: Буфер пуст или непригоден для анализа
    """
    try:
        target_bundle, user_bundle = analyze_pair(as_buffer(target), as_buffer(user), workers)
    except MirrorAccentError as exc:
        log.error('Сравнение прервано: %s', exc)
        raise

    scores = compare_prosody(target_bundle, user_bundle, weights=settings.score_weights)
    feedback = generate_feedback(
        scores, target_bundle, user_bundle, threshold=settings.feedback_threshold,
    )

    log.info('Итоговая оценка сходства: %.3f', scores.overall)

    return ComparisonReport(scores=scores, feedback=feedback, target=target_bundle, user=user_bundle)
