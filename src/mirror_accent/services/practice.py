"""
Тренировочная сессия: фраза, эталон в целевом акценте, попытки пользователя
и накопленная статистика.

Эталонное аудио синтезирует внешний сервис; сессия получает его как
вызываемый объект synthesize(text, accent) -> bytes и сама сеть не трогает.
"""

import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from mirror_accent.config import settings
from mirror_accent.constants import ACCENTS, PRACTICE_PROMPTS
from mirror_accent.features.aggregate import analyze_audio
from mirror_accent.log import setup_logger
from mirror_accent.scoring.feedback import generate_feedback
from mirror_accent.scoring.prosody import compare_prosody
from mirror_accent.services.comparison import as_buffer
from mirror_accent.types import FeatureBundle, SampleBuffer, ScoreSet

log = setup_logger('practice')

Synthesizer = Callable[[str, str], bytes]


@dataclass(frozen=True)
class SessionStats:
    attempts: int = 0
    total_score: float = 0.0
    best_score: float = 0.0

    @property
    def average_score(self) -> float:
        return self.total_score / self.attempts if self.attempts > 0 else 0.0

    def record(self, score: float) -> 'SessionStats':
        return replace(
            self,
            attempts=self.attempts + 1,
            total_score=self.total_score + score,
            best_score=max(self.best_score, score),
        )


@dataclass(frozen=True)
class AttemptResult:
    scores: ScoreSet
    feedback: list[str]
    target: FeatureBundle
    user: FeatureBundle
    stats: SessionStats


class PracticeSession:
    """Сессия упражнений «послушай и повтори» для одного целевого акцента."""

    def __init__(self, synthesize: Synthesizer,
                 prompts: Sequence[str] = PRACTICE_PROMPTS,
                 rng: random.Random | None = None):
        """
        Args:
            synthesize: Внешний сервис: (текст, акцент) -> закодированное аудио
            prompts: Набор фраз для упражнений
            rng: Генератор случайных чисел для выбора фразы
        """
        if not prompts:
            raise ValueError("Набор фраз пуст")

        self.synthesize = synthesize
        self.prompts = tuple(prompts)
        self.rng = rng or random.Random()

        self.accent: str | None = None
        self.prompt: str | None = None
        self.target_features: FeatureBundle | None = None
        self.stats = SessionStats()

    def start(self, accent: str) -> str:
        """
        Начинает сессию: сбрасывает статистику и выбирает первую фразу.

        Args:
            accent: Идентификатор целевого акцента

        Returns:
            Текст первой фразы
        """
        if accent not in ACCENTS:
            raise ValueError(f"Неизвестный акцент: {accent}. Доступны: {ACCENTS}")

        self.accent = accent
        self.stats = SessionStats()
        log.info('Сессия начата, акцент %s', accent)
        return self.next_prompt()

    def next_prompt(self) -> str:
        """Выбирает новую фразу и анализирует её эталонное произношение."""
        if self.accent is None:
            raise RuntimeError("Сессия не начата")

        prompt = self.rng.choice(self.prompts)
        target = as_buffer(self.synthesize(prompt, self.accent))

        self.target_features = analyze_audio(
            target,
            voicing_threshold=settings.voicing_threshold,
            max_bandwidth=settings.formant_max_bandwidth,
        )
        self.prompt = prompt
        return prompt

    def analyze_attempt(self, recording: SampleBuffer | bytes) -> AttemptResult:
        """
        Сравнивает попытку пользователя с эталоном текущей фразы.

        Args:
            recording: Запись пользователя (буфер или закодированные байты)

        Returns:
            AttemptResult с оценками, рекомендациями и снимком статистики
        """
        if self.target_features is None:
            raise RuntimeError("Нет эталона: сессия не начата")

        user_features = analyze_audio(
            as_buffer(recording),
            voicing_threshold=settings.voicing_threshold,
            max_bandwidth=settings.formant_max_bandwidth,
        )
        scores = compare_prosody(self.target_features, user_features, weights=settings.score_weights)
        feedback = generate_feedback(
            scores, self.target_features, user_features, threshold=settings.feedback_threshold,
        )

        self.stats = self.stats.record(scores.overall)
        log.info('Попытка %s: %.3f (лучшая %.3f)', self.stats.attempts, scores.overall, self.stats.best_score)

        return AttemptResult(
            scores=scores,
            feedback=feedback,
            target=self.target_features,
            user=user_features,
            stats=self.stats,
        )
