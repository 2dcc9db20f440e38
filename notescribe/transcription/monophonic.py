"""Monophonic note detection using frame pitch tracking and a stability gate."""

import logging
from collections import deque
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .base import Transcriber
from ..analysis.pitch import McLeodPitchDetector, PitchDetector, note_name
from ..analysis.signal import frame_starts, median, rms, round_half_up
from ..core import Note, constants as C
from ..core.config import AnalysisConfig

logger = logging.getLogger(__name__)


@dataclass
class _PendingNote:
    """A note that passed the stability check but has not ended yet."""

    pitch: str
    start_time: float
    velocity: int


class NoteTracker:
    """Frame-by-frame stability state machine.

    A pitch becomes a note once the same name has been seen on
    ``min_stable_frames`` consecutive confident frames; the note starts at
    the first of those frames. A note ends when the name changes or a
    non-confident frame arrives, and is only emitted if it lasted at least
    ``min_duration`` seconds.
    """

    def __init__(
        self,
        min_stable_frames: int = C.MIN_STABLE_FRAMES,
        min_duration: float = C.MIN_DETECTED_DURATION,
    ):
        self.min_stable_frames = min_stable_frames
        self.min_duration = min_duration
        self.reset()

    def reset(self) -> None:
        """Forget the current pitch, counters and any confirmed note."""
        self.last_pitch = ""
        self.consecutive_frames = 0
        self.potential_start: Optional[float] = None
        self.current: Optional[_PendingNote] = None

    def advance(self, time: float, pitch: Optional[str], velocity: int) -> Optional[Note]:
        """
        Feed one frame to the state machine.

        Args:
            time: Frame time in seconds
            pitch: Note name of a confident frame, None or "" otherwise
            velocity: Frame velocity (0-127)

        Returns:
            The note that ended on this frame, if any
        """
        if not pitch:
            finished = self._close(time)
            self.reset()
            return finished

        finished = None
        if pitch == self.last_pitch:
            self.consecutive_frames += 1
        else:
            finished = self._close(time)
            self.last_pitch = pitch
            self.consecutive_frames = 1
            self.potential_start = time
            self.current = None

        if self.consecutive_frames == self.min_stable_frames and self.potential_start is not None:
            self.current = _PendingNote(pitch, self.potential_start, velocity)
        elif self.current is not None:
            self.current.velocity = max(self.current.velocity, velocity)

        return finished

    def finish(self, end_time: float) -> Optional[Note]:
        """Close a note still open at the end of the audio."""
        finished = self._close(end_time)
        self.reset()
        return finished

    def _close(self, end_time: float) -> Optional[Note]:
        if self.current is None or self.consecutive_frames < self.min_stable_frames:
            return None

        duration = end_time - self.current.start_time
        if duration < self.min_duration:
            return None

        return Note(
            pitch=self.current.pitch,
            start_time=self.current.start_time,
            duration=duration,
            velocity=self.current.velocity,
        )


class NoteDetector(Transcriber):
    """Detects notes in monophonic audio with a pluggable pitch detector."""

    def __init__(
        self,
        pitch_detector: Optional[PitchDetector] = None,
        config: Optional[AnalysisConfig] = None,
    ):
        """
        Initialize NoteDetector.

        Args:
            pitch_detector: Frame pitch detector (default: McLeodPitchDetector)
            config: Frame sizes and thresholds (default: AnalysisConfig())
        """
        self.pitch_detector = pitch_detector or McLeodPitchDetector()
        self.config = config or AnalysisConfig()

    def transcribe(self, audio: np.ndarray, sr: int) -> List[Note]:
        return self.detect(audio, sr)

    def detect(self, audio: np.ndarray, sr: int) -> List[Note]:
        """
        Detect notes in a mono buffer.

        Args:
            audio: Mono audio array
            sr: Sample rate

        Returns:
            Notes in order of detection, empty for silent or short input
        """
        cfg = self.config
        audio = np.asarray(audio, dtype=np.float64)

        overall_rms = rms(audio)
        silence_gate = overall_rms * cfg.silence_gate_ratio
        recent = deque(maxlen=cfg.smoothing_window)
        tracker = NoteTracker(cfg.min_stable_frames, cfg.min_detected_duration)
        notes = []

        for start in frame_starts(len(audio), cfg.frame_size, cfg.hop_size):
            frame = audio[start:start + cfg.frame_size]
            time = start / sr
            frame_rms = rms(frame)

            frequency, clarity = 0.0, 0.0
            if frame_rms > silence_gate:
                frequency, clarity = self.pitch_detector.find_pitch(frame, sr)

            # Zeros stay in the window so silence pulls the median down
            recent.append(frequency if frequency > 0 else 0.0)
            name = note_name(median(list(recent)))
            velocity = self._velocity(frame_rms, overall_rms)

            confident = bool(name) and clarity >= cfg.clarity_threshold
            finished = tracker.advance(time, name if confident else None, velocity)
            if not confident:
                recent.clear()
            if finished is not None:
                notes.append(finished)

        finished = tracker.finish(len(audio) / sr)
        if finished is not None:
            notes.append(finished)

        logger.debug("Detected %d notes", len(notes))
        return notes

    def _velocity(self, frame_rms: float, overall_rms: float) -> int:
        """Map frame loudness relative to the whole track to MIDI velocity."""
        scaled = frame_rms / (overall_rms + C.RMS_EPSILON) * C.VELOCITY_SCALE + C.VELOCITY_OFFSET
        return max(C.MIDI_MIN, min(C.MIDI_MAX, round_half_up(scaled)))
