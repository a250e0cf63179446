"""Конфигурация приложения через переменные окружения.

Инфраструктурные параметры и настраиваемые пороги/веса.
Алгоритмические константы (сетка фреймов, порядок LPC)
остаются в constants.py: они не должны меняться через .env.

Сам движок анализа настройки не читает: сервисный слой и CLI
передают значения в функции явными аргументами.

Использование::

    from mirror_accent.config import settings

    settings.voicing_threshold  # 0.1
    settings.score_weights      # {'f0': 0.25, ...}
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from mirror_accent.constants import (
    DEFAULT_WEIGHTS,
    FEEDBACK_THRESHOLD,
    FORMANT_MAX_BANDWIDTH,
    VOICING_THRESHOLD,
)


class Settings(BaseSettings):
    """Настройки приложения mirror_accent."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        env_prefix='MA_',
        extra='ignore',
    )

    # ── Логирование ──────────────────────────────
    log_level: str = 'INFO'
    log_file: Path | None = None

    # ── Производительность ───────────────────────
    analysis_workers: int = 1

    # ── Эмпирические пороги анализа ──────────────
    voicing_threshold: float = VOICING_THRESHOLD
    formant_max_bandwidth: float = FORMANT_MAX_BANDWIDTH
    feedback_threshold: float = FEEDBACK_THRESHOLD

    # ── Весовые коэффициенты итоговой оценки ─────
    weight_f0: float = DEFAULT_WEIGHTS['f0']
    weight_formants: float = DEFAULT_WEIGHTS['formants']
    weight_intensity: float = DEFAULT_WEIGHTS['intensity']
    weight_speaking_rate: float = DEFAULT_WEIGHTS['speaking_rate']
    weight_pitch_range: float = DEFAULT_WEIGHTS['pitch_range']
    weight_duration: float = DEFAULT_WEIGHTS['duration']

    @property
    def score_weights(self) -> dict[str, float]:
        """Весовые коэффициенты измерений как словарь."""
        return {
            'f0': self.weight_f0,
            'formants': self.weight_formants,
            'intensity': self.weight_intensity,
            'speaking_rate': self.weight_speaking_rate,
            'pitch_range': self.weight_pitch_range,
            'duration': self.weight_duration,
        }

    def ensure_dirs(self) -> None:
        """Создаёт директорию для файла логов, если он задан."""
        if self.log_file is not None:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


settings = Settings()
