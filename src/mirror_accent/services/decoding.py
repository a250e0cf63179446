"""Декодирование аудио из байтов в моно-буфер отсчётов."""

import io
import os

import numpy as np
import soundfile as sf
from pydub import AudioSegment

from mirror_accent.constants import SUPPORTED_EXTENSIONS
from mirror_accent.errors import DecodeError
from mirror_accent.log import setup_logger
from mirror_accent.types import SampleBuffer, frozen_array

# ──────────────── Логгер ────────────────
log = setup_logger("decoding")


def _decode_with_soundfile(data: bytes) -> tuple[np.ndarray, int]:
    samples, sample_rate = sf.read(io.BytesIO(data), dtype='float64', always_2d=True)
    return samples[:, 0], int(sample_rate)


def _decode_with_pydub(data: bytes) -> tuple[np.ndarray, int]:
    audio = AudioSegment.from_file(io.BytesIO(data))

    samples = np.array(audio.get_array_of_samples(), dtype=np.float64)
    if audio.channels > 1:
        samples = samples.reshape(-1, audio.channels)[:, 0]

    # Целочисленные PCM-отсчёты в диапазон [-1, 1]
    full_scale = float(1 << (8 * audio.sample_width - 1))
    return samples / full_scale, int(audio.frame_rate)


def decode_audio(data: bytes) -> SampleBuffer:
    """
    Декодирует закодированное аудио в моно-буфер.
    Из многоканальной записи берётся канал 0.

    Сначала пробуем soundfile (WAV, FLAC, OGG), при неудаче - pydub/ffmpeg
    для сжатых контейнеров (webm, mp3, m4a).

    Args:
        data: Байты аудиофайла в произвольном формате

    Returns:
        SampleBuffer

    Raises:
        DecodeError: Формат не поддерживается, данные повреждены или пусты
    """
    if not data:
        raise DecodeError("Пустые аудиоданные")

    try:
        samples, sample_rate = _decode_with_soundfile(data)
    except RuntimeError as sf_error:
        log.debug(f"soundfile не справился: {sf_error}. Используем pydub")
        try:
            samples, sample_rate = _decode_with_pydub(data)
        except Exception as exc:
            log.error(f"Не удалось декодировать аудио: {exc}")
            raise DecodeError(f"Не удалось декодировать аудио: {exc}") from exc

    if len(samples) == 0:
        raise DecodeError("Декодированное аудио не содержит отсчётов")

    log.info(f"Аудио декодировано: {len(samples)} отсчётов, {sample_rate} Гц")
    return SampleBuffer(samples=frozen_array(samples), sample_rate=sample_rate)


def load_audio(file_path: str) -> SampleBuffer:
    """
    Читает аудиофайл и декодирует его.

    Args:
        file_path: Путь к аудиофайлу

    Returns:
        SampleBuffer

    Raises:
        DecodeError: Неподдерживаемое расширение, ошибка чтения или декодирования
    """
    ext = os.path.splitext(file_path)[-1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise DecodeError(f"Неподдерживаемый формат файла: {ext}. Поддерживаются: {sorted(SUPPORTED_EXTENSIONS)}")

    try:
        with open(file_path, 'rb') as f:
            data = f.read()
    except OSError as exc:
        raise DecodeError(f"Не удалось прочитать файл {file_path}: {exc}") from exc

    return decode_audio(data)
