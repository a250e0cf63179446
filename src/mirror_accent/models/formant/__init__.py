"""Формантный анализ голосового тракта."""

from mirror_accent.models.formant.core import FormantAnalyzer, extract_formants
from mirror_accent.models.formant.roots import durand_kerner

__all__ = [
    'FormantAnalyzer',
    'extract_formants',
    'durand_kerner',
]
