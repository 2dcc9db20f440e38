"""notescribe - Audio to symbolic music description.

Architecture Layers:
    1. core/          - Note, AnalysisResult, AudioBuffer, constants, config
    2. input/         - Audio decoding
    3. analysis/      - Low-level signal analysis (RMS, pitch, tempo)
    4. transcription/ - Note detection (pitch tracking + stability gate)
    5. inference/     - Musical understanding (key, time signature)
    6. processing/    - Note post-processing (filter, merge, placeholders)
    7. pipeline       - Orchestration of all layers
"""

__version__ = "0.1.0"

# Core types
from .core import Note, AnalysisResult, AudioBuffer, AnalysisConfig, AudioDecodeError

# Input layer
from .input import AudioLoader

# Analysis layer
from .analysis import (
    note_name,
    PitchDetector,
    McLeodPitchDetector,
    PyinPitchDetector,
    TempoEstimator,
)

# Transcription layer
from .transcription import NoteDetector

# Inference layer
from .inference import KeyEstimator, TimeSignatureEstimator

# Processing layer
from .processing import NoteCleanup, synthetic_notes

# Pipeline
from .pipeline import AnalysisPipeline, analyze

__all__ = [
    # Core
    "Note",
    "AnalysisResult",
    "AudioBuffer",
    "AnalysisConfig",
    "AudioDecodeError",
    # Input
    "AudioLoader",
    # Analysis
    "note_name",
    "PitchDetector",
    "McLeodPitchDetector",
    "PyinPitchDetector",
    "TempoEstimator",
    # Transcription
    "NoteDetector",
    # Inference
    "KeyEstimator",
    "TimeSignatureEstimator",
    # Processing
    "NoteCleanup",
    "synthetic_notes",
    # Pipeline
    "AnalysisPipeline",
    "analyze",
]
