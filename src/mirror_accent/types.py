"""Структуры данных анализа просодии.

Все записи неизменяемы: dataclass(frozen=True), а числовые ряды
хранятся как numpy-массивы float64 с запретом записи. Пофреймовые
ряды одного буфера разделяют общую временную сетку (25 мс / 10 мс);
ноль в ряду означает «не вычислено / невокализовано», а не измерение.
"""

from dataclasses import dataclass, fields, is_dataclass

import numpy as np

from mirror_accent.constants import FRAME_RATE


def frozen_array(values) -> np.ndarray:
    """Копия значений в виде float64-массива только для чтения."""
    array = np.array(values, dtype=np.float64)
    array.setflags(write=False)
    return array


def freeze_arrays(record):
    """
    Запрещает запись во все numpy-массивы записи, включая вложенные dataclass.

    Нужна после передачи между процессами: pickle восстанавливает
    массивы доступными для записи.

    Returns:
        Ту же запись
    """
    for item in fields(record):
        value = getattr(record, item.name)
        if isinstance(value, np.ndarray):
            value.setflags(write=False)
        elif is_dataclass(value):
            freeze_arrays(value)
    return record


@dataclass(frozen=True)
class SampleBuffer:
    """Моно-отсчёты в диапазоне [-1, 1] и частота дискретизации."""
    samples: np.ndarray
    sample_rate: int

    @property
    def duration(self) -> float:
        """Длительность в секундах."""
        if self.sample_rate <= 0:
            return 0.0
        return len(self.samples) / self.sample_rate


@dataclass(frozen=True)
class F0Contour:
    """Контур основного тона: одно значение на фрейм, 0 означает невокализованный фрейм."""
    values: np.ndarray
    times: np.ndarray
    frame_rate: float = FRAME_RATE

    @property
    def voiced(self) -> np.ndarray:
        """Только вокализованные значения в исходном порядке."""
        return self.values[self.values > 0]


@dataclass(frozen=True)
class FormantSeries:
    values: np.ndarray
    mean: float


@dataclass(frozen=True)
class FormantContour:
    """Три параллельных ряда формант F1-F3 на общей сетке фреймов."""
    f1: FormantSeries
    f2: FormantSeries
    f3: FormantSeries
    times: np.ndarray


@dataclass(frozen=True)
class IntensityContour:
    """Энергия фреймов в дБ, её среднее и динамический диапазон."""
    values: np.ndarray
    times: np.ndarray
    mean: float
    range: float


@dataclass(frozen=True)
class SpeakingRate:
    syllables_per_second: float
    estimated_syllables: int
    duration: float


@dataclass(frozen=True)
class PitchRange:
    """Статистика вокализованного F0."""
    min: float
    max: float
    mean: float
    variance: float

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class FeatureBundle:
    """Полный набор просодических признаков одной записи.

    pitch_range равен None, если в записи нет ни одного вокализованного фрейма.
    """
    f0: F0Contour
    formants: FormantContour
    intensity: IntensityContour
    duration: float
    speaking_rate: SpeakingRate
    pitch_range: PitchRange | None = None

    @property
    def frame_count(self) -> int:
        return len(self.f0.values)


@dataclass(frozen=True)
class ScoreSet:
    """Оценки сходства по измерениям, каждая в [0, 1], и взвешенная итоговая."""
    f0: float
    formants: float
    intensity: float
    speaking_rate: float
    pitch_range: float
    duration: float
    overall: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {
            'f0': self.f0,
            'formants': self.formants,
            'intensity': self.intensity,
            'speaking_rate': self.speaking_rate,
            'pitch_range': self.pitch_range,
            'duration': self.duration,
            'overall': self.overall,
        }
