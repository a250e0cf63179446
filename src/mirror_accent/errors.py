"""Исключения mirror_accent."""


class MirrorAccentError(Exception):
    """Базовая ошибка пакета."""


class InvalidAudioError(MirrorAccentError, ValueError):
    """Пустой или непригодный для анализа буфер отсчётов."""


class DecodeError(MirrorAccentError):
    """Байты не удалось декодировать в отсчёты (формат не поддерживается или повреждён)."""
