"""Общая сетка фреймов 25 мс / 10 мс для всех пофреймовых признаков."""

import librosa
import numpy as np

from mirror_accent.constants import FRAME_DURATION_S, HOP_DURATION_S
from mirror_accent.errors import InvalidAudioError


def frame_geometry(sample_rate: int) -> tuple[int, int]:
    """
    Размер фрейма и шаг в отсчётах для заданной частоты дискретизации.

    Args:
        sample_rate: Частота дискретизации в Гц

    Returns:
        (frame_length, hop_length)
    """
    frame_length = int(FRAME_DURATION_S * sample_rate)
    hop_length = int(HOP_DURATION_S * sample_rate)
    if hop_length < 1:
        raise InvalidAudioError(f"Слишком низкая частота дискретизации: {sample_rate} Гц")
    return frame_length, hop_length


def split_frames(y: np.ndarray, sample_rate: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Нарезает сигнал на перекрывающиеся фреймы.

    Фрейм с началом i берётся, только пока i + frame_length < len(y):
    хвост, не помещающийся целиком, отбрасывается без дополнения нулями.

    Args:
        y: Аудиосигнал (1-D)
        sample_rate: Частота дискретизации

    Returns:
        (frames, times): матрица (n_frames, frame_length) и время начала каждого фрейма в секундах
    """
    frame_length, hop_length = frame_geometry(sample_rate)

    if len(y) <= frame_length:
        return np.empty((0, frame_length)), np.empty(0)

    # Последний отсчёт не попадает ни в один фрейм, поэтому режем по y[:-1]
    frames = librosa.util.frame(y[:-1], frame_length=frame_length, hop_length=hop_length)
    frames = np.ascontiguousarray(frames.T, dtype=np.float64)
    times = np.arange(frames.shape[0]) * hop_length / sample_rate

    return frames, times
