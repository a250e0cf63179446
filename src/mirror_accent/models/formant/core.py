"""
Модуль: core.py
Описание: LPC-анализ и извлечение формант F1-F3 для системы mirror_accent.
Каждый фрейм проходит окно Хэмминга, предыскажение, автокорреляцию,
рекурсию Левинсона-Дурбина и поиск корней LPC-полинома.
"""

import numpy as np
import scipy.signal

from mirror_accent.constants import (
    FORMANT_COUNT,
    FORMANT_MAX_BANDWIDTH,
    FORMANT_MAX_FREQUENCY,
    FORMANT_MIN_FREQUENCY,
    LPC_ORDER,
    PRE_EMPHASIS,
)
from mirror_accent.features.framing import split_frames
from mirror_accent.log import setup_logger
from mirror_accent.models.formant.roots import durand_kerner
from mirror_accent.types import FormantContour, FormantSeries, frozen_array

log = setup_logger("formant_core")


class FormantAnalyzer:
    """
    Класс для анализа формант речевого сигнала.
    Форманты - резонансные частоты голосового тракта; по F1 и F2 различается
    качество гласных, поэтому они чувствительны к акценту.
    """

    def __init__(self, sample_rate: int, order: int = LPC_ORDER,
                 max_bandwidth: float = FORMANT_MAX_BANDWIDTH):
        """
        Инициализирует анализатор формант.

        Args:
            sample_rate: Частота дискретизации в Гц
            order: Порядок LPC-анализа
            max_bandwidth: Максимальная полоса пропускания форманты в Гц
        """
        self.sample_rate = sample_rate
        self.order = order
        self.max_bandwidth = max_bandwidth

        # Физически правдоподобный диапазон формант (в Гц), границы не включаются
        self.frequency_range = (FORMANT_MIN_FREQUENCY, FORMANT_MAX_FREQUENCY)

    @staticmethod
    def apply_window(frames: np.ndarray) -> np.ndarray:
        """Окно Хэмминга 0.54 - 0.46·cos(2πi/(N-1)) по каждому фрейму."""
        return frames * np.hamming(frames.shape[-1])

    @staticmethod
    def pre_emphasis(frames: np.ndarray, coeff: float = PRE_EMPHASIS) -> np.ndarray:
        """Фильтр предыскажения y[i] = x[i] - coeff·x[i-1], y[0] = x[0]."""
        return scipy.signal.lfilter([1.0, -coeff], [1.0], frames, axis=-1)

    def autocorrelation(self, frames: np.ndarray) -> np.ndarray:
        """
        Автокорреляция фреймов для лагов 0..order.

        Args:
            frames: Матрица фреймов (n_frames, frame_length)

        Returns:
            Матрица (n_frames, order + 1)
        """
        frame_length = frames.shape[-1]
        r = np.zeros((frames.shape[0], self.order + 1))
        for lag in range(min(self.order + 1, frame_length)):
            r[:, lag] = np.sum(frames[:, :frame_length - lag] * frames[:, lag:], axis=1)
        return r

    def levinson_durbin(self, r: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """
        Решает нормальные уравнения линейного предсказания рекурсией Левинсона-Дурбина.

        Фреймы с нулевой ошибкой предсказания на каком-либо шаге дальше
        не уточняются: их коэффициенты остаются с предыдущего порядка.

        Args:
            r: Автокорреляция (n_frames, order + 1)

        Returns:
            (a, e): коэффициенты LPC (n_frames, order + 1) с a[:, 0] = 1
            и энергия ошибки предсказания на каждом порядке (n_frames, order + 1)
        """
        n_frames = r.shape[0]
        a = np.zeros((n_frames, self.order + 1))
        e = np.zeros((n_frames, self.order + 1))
        a[:, 0] = 1.0
        e[:, 0] = r[:, 0]

        for i in range(1, self.order + 1):
            acc = np.sum(a[:, :i] * r[:, i:0:-1], axis=1)
            active = e[:, i - 1] > 0
            reflection = np.zeros(n_frames)
            reflection[active] = -acc[active] / e[active, i - 1]

            previous = a.copy()
            a[:, 1:i + 1] = previous[:, 1:i + 1] + reflection[:, None] * previous[:, i - 1::-1]
            e[:, i] = (1.0 - reflection ** 2) * e[:, i - 1]

        return a, e

    def lpc_to_formants(self, roots: np.ndarray) -> np.ndarray:
        """
        Переводит корни LPC-полинома одного фрейма в частоты формант.

        Args:
            roots: Комплексные корни полинома

        Returns:
            Массив из трёх частот F1-F3 в Гц, отсутствующие форманты равны 0
        """
        formants = np.zeros(FORMANT_COUNT)

        # Только корни с положительной мнимой частью (комплексно-сопряжённые пары)
        roots = roots[np.isfinite(roots) & (np.imag(roots) > 0)]
        if len(roots) == 0:
            return formants

        freqs = np.arctan2(np.imag(roots), np.real(roots)) * self.sample_rate / (2 * np.pi)
        bandwidths = -np.log(np.abs(roots)) * self.sample_rate / np.pi

        low, high = self.frequency_range
        valid = (freqs > low) & (freqs < high) & (bandwidths < self.max_bandwidth)
        candidates = np.sort(freqs[valid])[:FORMANT_COUNT]

        formants[:len(candidates)] = candidates
        return formants

    def extract(self, y: np.ndarray) -> FormantContour:
        """
        Извлекает контуры формант F1-F3 по сетке фреймов 25 мс / 10 мс.

        Args:
            y: Аудиосигнал

        Returns:
            FormantContour с рядами F1-F3 и их средними по ненулевым фреймам
        """
        frames, times = split_frames(y, self.sample_rate)
        values = np.zeros((len(frames), FORMANT_COUNT))

        if len(frames):
            emphasized = self.pre_emphasis(self.apply_window(frames))
            r = self.autocorrelation(emphasized)

            # Тихие фреймы (нулевая энергия) остаются нулевыми
            voiced = r[:, 0] > 0
            if np.any(voiced):
                lpc, _ = self.levinson_durbin(r[voiced])
                roots = durand_kerner(lpc)
                values[voiced] = np.array([self.lpc_to_formants(frame_roots) for frame_roots in roots])

        log.debug('Форманты: %s фреймов, F1 найдена в %s', len(values), int(np.count_nonzero(values[:, 0])))

        series = []
        for k in range(FORMANT_COUNT):
            column = values[:, k]
            nonzero = column[column > 0]
            mean = float(np.mean(nonzero)) if len(nonzero) else 0.0
            series.append(FormantSeries(values=frozen_array(column), mean=mean))

        return FormantContour(f1=series[0], f2=series[1], f3=series[2], times=frozen_array(times))


def extract_formants(y: np.ndarray, sample_rate: int,
                     order: int = LPC_ORDER,
                     max_bandwidth: float = FORMANT_MAX_BANDWIDTH) -> FormantContour:
    """
    Извлекает форманты F1-F3 из сигнала.

    Args:
        y: Аудиосигнал
        sample_rate: Частота дискретизации
        order: Порядок LPC-анализа
        max_bandwidth: Максимальная полоса пропускания форманты в Гц

    Returns:
        FormantContour
    """
    return FormantAnalyzer(sample_rate, order=order, max_bandwidth=max_bandwidth).extract(y)
