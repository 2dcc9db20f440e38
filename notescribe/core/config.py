"""Tunable analysis settings."""

from dataclasses import dataclass

from . import constants as C


@dataclass
class AnalysisConfig:
    """Configuration for the analysis pipeline.

    Results are only comparable between runs that share these settings.

    Attributes:
        frame_size: Pitch analysis frame length in samples (default: 2048)
        hop_size: Samples between pitch frames (default: 441)
        silence_gate_ratio: Frame RMS below ratio * global RMS is silence (default: 0.08)
        smoothing_window: Median filter length in frames (default: 3)
        clarity_threshold: Minimum detector clarity for a confident frame (default: 0.88)
        min_stable_frames: Identical confident frames needed to confirm a note (default: 3)
        min_detected_duration: Shortest note the detector emits, seconds (default: 0.07)
        tempo_frame_size: Onset analysis frame length in samples (default: 1024)
        tempo_hop_size: Samples between onset frames (default: 256)
        min_tempo: Lower tempo bound in BPM (default: 60)
        max_tempo: Upper tempo bound in BPM (default: 180)
        default_tempo: Tempo reported on insufficient evidence (default: 120)
        max_duration: Longest analyzed span, seconds (default: 60)
        min_note_duration: Shortest note kept in the final result, seconds (default: 0.12)
        merge_gap: Same-pitch notes closer than this are merged, seconds (default: 0.05)
    """

    frame_size: int = C.FRAME_SIZE
    hop_size: int = C.HOP_SIZE
    silence_gate_ratio: float = C.SILENCE_GATE_RATIO
    smoothing_window: int = C.SMOOTHING_WINDOW
    clarity_threshold: float = C.CLARITY_THRESHOLD
    min_stable_frames: int = C.MIN_STABLE_FRAMES
    min_detected_duration: float = C.MIN_DETECTED_DURATION
    tempo_frame_size: int = C.TEMPO_FRAME_SIZE
    tempo_hop_size: int = C.TEMPO_HOP_SIZE
    min_tempo: int = C.MIN_TEMPO
    max_tempo: int = C.MAX_TEMPO
    default_tempo: int = C.DEFAULT_TEMPO
    max_duration: float = C.MAX_DURATION
    min_note_duration: float = C.MIN_NOTE_DURATION
    merge_gap: float = C.MERGE_GAP

    def __post_init__(self):
        if self.frame_size <= 0 or self.hop_size <= 0:
            raise ValueError("frame_size and hop_size must be positive")
        if self.tempo_frame_size <= 0 or self.tempo_hop_size <= 0:
            raise ValueError("tempo_frame_size and tempo_hop_size must be positive")
        if self.min_tempo > self.max_tempo:
            raise ValueError(
                f"min_tempo ({self.min_tempo}) exceeds max_tempo ({self.max_tempo})"
            )
        if self.max_duration <= 0:
            raise ValueError("max_duration must be positive")
