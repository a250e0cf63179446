"""Анализ и сравнение просодии: тон, форманты, интенсивность, темп и длительность."""

from mirror_accent.errors import DecodeError, InvalidAudioError, MirrorAccentError
from mirror_accent.features.aggregate import analyze_audio
from mirror_accent.scoring.dtw import dtw_similarity
from mirror_accent.scoring.feedback import generate_feedback
from mirror_accent.scoring.prosody import compare_prosody
from mirror_accent.types import FeatureBundle, SampleBuffer, ScoreSet

__version__ = '0.1.0'

__all__ = [
    'analyze_audio',
    'compare_prosody',
    'dtw_similarity',
    'generate_feedback',
    'FeatureBundle',
    'SampleBuffer',
    'ScoreSet',
    'DecodeError',
    'InvalidAudioError',
    'MirrorAccentError',
]
