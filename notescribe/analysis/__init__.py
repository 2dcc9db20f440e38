"""Analysis layer - Low-level signal analysis.

This layer works directly on sample buffers:
- Signal helpers (RMS, median, framing)
- Pitch naming and frame-level pitch detection
- Tempo estimation from energy onsets
"""

from .signal import rms, median, round_half_up, frame_starts
from .pitch import (
    note_name,
    note_name_to_midi,
    freq_to_midi,
    midi_to_freq,
    PitchDetector,
    McLeodPitchDetector,
    PyinPitchDetector,
    get_pitch_detector,
)
from .tempo import TempoEstimator, TempoInfo

__all__ = [
    "rms",
    "median",
    "round_half_up",
    "frame_starts",
    "note_name",
    "note_name_to_midi",
    "freq_to_midi",
    "midi_to_freq",
    "PitchDetector",
    "McLeodPitchDetector",
    "PyinPitchDetector",
    "get_pitch_detector",
    "TempoEstimator",
    "TempoInfo",
]
