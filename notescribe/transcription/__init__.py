"""Transcription layer - Note-level detection from audio.

This layer converts a mono signal into discrete note events using a
frame pitch detector and a stability state machine.
"""

from .base import Transcriber
from .monophonic import NoteDetector, NoteTracker

__all__ = [
    "Transcriber",
    "NoteDetector",
    "NoteTracker",
]
