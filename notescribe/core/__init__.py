"""Core types and constants for notescribe."""

from .note import Note, AnalysisResult
from .audio import AudioBuffer
from .config import AnalysisConfig
from .errors import NotescribeError, AudioDecodeError
from .constants import (
    PITCH_NAMES,
    DEFAULT_TEMPO,
    DEFAULT_KEY,
    DEFAULT_TIME_SIGNATURE,
    KEY_UNKNOWN,
)

__all__ = [
    "Note",
    "AnalysisResult",
    "AudioBuffer",
    "AnalysisConfig",
    "NotescribeError",
    "AudioDecodeError",
    "PITCH_NAMES",
    "DEFAULT_TEMPO",
    "DEFAULT_KEY",
    "DEFAULT_TIME_SIGNATURE",
    "KEY_UNKNOWN",
]
