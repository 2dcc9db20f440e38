"""Tempo analysis from energy onsets."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..core import constants as C
from ..core.config import AnalysisConfig
from .signal import frame_starts, median, rms, round_half_up

logger = logging.getLogger(__name__)


@dataclass
class TempoInfo:
    """Container for tempo analysis results."""

    bpm: int
    onset_times: List[float] = field(default_factory=list)  # Onset positions in seconds
    ioi_candidates: List[float] = field(default_factory=list)  # Folded beat periods
    is_default: bool = False  # True if evidence was too thin to estimate


class TempoEstimator:
    """Estimate a global tempo from inter-onset intervals.

    Onsets are frames whose RMS jumps well above both the previous frame and
    the recent average. Intervals between onsets are folded into the
    plausible beat-period band and the median interval gives the tempo.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        config = config or AnalysisConfig()
        self.frame_size = config.tempo_frame_size
        self.hop_size = config.tempo_hop_size
        self.min_tempo = config.min_tempo
        self.max_tempo = config.max_tempo
        self.default_tempo = config.default_tempo

    def estimate(self, audio: np.ndarray, sr: int) -> int:
        """
        Estimate tempo in BPM.

        Args:
            audio: Mono audio array
            sr: Sample rate

        Returns:
            Integer BPM within [min_tempo, max_tempo]
        """
        return self.analyze(audio, sr).bpm

    def analyze(self, audio: np.ndarray, sr: int) -> TempoInfo:
        """
        Perform full tempo analysis.

        Args:
            audio: Mono audio array
            sr: Sample rate

        Returns:
            TempoInfo with onsets and interval candidates
        """
        onset_times = self.detect_onsets(audio, sr)

        if len(onset_times) < C.MIN_ONSETS:
            logger.debug(
                "Only %d onsets found, using default tempo %d",
                len(onset_times), self.default_tempo,
            )
            return TempoInfo(self.default_tempo, onset_times, is_default=True)

        candidates = self.fold_intervals(onset_times)
        if len(candidates) < C.MIN_IOI_CANDIDATES:
            logger.debug(
                "Only %d usable intervals, using default tempo %d",
                len(candidates), self.default_tempo,
            )
            return TempoInfo(self.default_tempo, onset_times, candidates, is_default=True)

        median_ioi = median(candidates)
        if median_ioi <= 0:
            return TempoInfo(self.default_tempo, onset_times, candidates, is_default=True)

        bpm = round_half_up(60.0 / median_ioi)
        bpm = max(self.min_tempo, min(self.max_tempo, bpm))
        return TempoInfo(bpm, onset_times, candidates)

    def detect_onsets(self, audio: np.ndarray, sr: int) -> List[float]:
        """
        Detect energy onsets.

        An onset is flagged when the frame RMS exceeds 1.5x the previous
        frame, 1.1x the mean of the last 10 frames (current included), and
        an absolute floor of 0.01.

        Returns:
            Onset times in seconds (frame start positions)
        """
        audio = np.asarray(audio, dtype=np.float64)
        onsets = []
        history = []
        previous = 0.0

        for start in frame_starts(len(audio), self.frame_size, self.hop_size):
            current = rms(audio[start:start + self.frame_size])
            history.append(current)
            if len(history) > C.ONSET_HISTORY:
                history.pop(0)
            local_mean = sum(history) / len(history)

            if (
                current > previous * C.ONSET_RISE_RATIO
                and current > local_mean * C.ONSET_LOCAL_RATIO
                and current > C.ONSET_MIN_RMS
            ):
                onsets.append(start / sr)
            previous = current

        return onsets

    def fold_intervals(self, onset_times: List[float]) -> List[float]:
        """
        Fold inter-onset intervals into the beat-period band.

        An interval inside [60/max_tempo, 60/min_tempo] seconds is kept as is.
        One outside it is replaced by its double, or failing that its half,
        when that lands in the band; otherwise it is dropped.
        """
        shortest = 60.0 / self.max_tempo
        longest = 60.0 / self.min_tempo

        def in_band(value: float) -> bool:
            return shortest <= value <= longest

        candidates = []
        for prev, cur in zip(onset_times, onset_times[1:]):
            ioi = cur - prev
            for value in (ioi, ioi * 2, ioi / 2):
                if in_band(value):
                    candidates.append(value)
                    break
        return candidates
