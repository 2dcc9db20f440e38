"""Analysis pipeline - decoded audio in, symbolic description out.

Steps:
    1. Truncate to the maximum analyzable duration
    2. Mix down to mono
    3. Detect notes (synthetic placeholders if none)
    4. Estimate tempo, key and time signature
    5. Filter, sort and merge notes
"""

import logging
from typing import List, Optional

from .analysis import PitchDetector, TempoEstimator
from .analysis.signal import round_half_up
from .core import AnalysisConfig, AnalysisResult, AudioBuffer, Note, constants as C
from .inference import KeyEstimator, TimeSignatureEstimator
from .processing import NoteCleanup, synthetic_notes
from .transcription import NoteDetector, Transcriber

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """Run every analyzer over one buffer and package the result.

    ``analyze`` never raises: any unexpected error is logged and replaced by
    a safe default result, so callers always get something renderable.
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        pitch_detector: Optional[PitchDetector] = None,
        transcriber: Optional[Transcriber] = None,
    ):
        """
        Args:
            config: Analysis settings (default: AnalysisConfig())
            pitch_detector: Frame detector for the default NoteDetector
            transcriber: Note source; overrides pitch_detector when given
        """
        self.config = config or AnalysisConfig()
        self.transcriber: Transcriber = transcriber or NoteDetector(pitch_detector, self.config)
        self.tempo_estimator = TempoEstimator(self.config)
        self.key_estimator = KeyEstimator()
        self.meter_estimator = TimeSignatureEstimator()
        self.cleaner = NoteCleanup(config=self.config)

    def analyze(self, buffer: AudioBuffer) -> AnalysisResult:
        """
        Analyze a decoded buffer.

        Args:
            buffer: Decoded audio (any number of channels)

        Returns:
            AnalysisResult, the safe default if anything went wrong
        """
        try:
            return self._analyze(buffer)
        except Exception:
            logger.exception("Audio analysis failed, returning default result")
            return default_result()

    def _analyze(self, buffer: AudioBuffer) -> AnalysisResult:
        truncated = False
        if buffer.duration > self.config.max_duration:
            logger.warning(
                "Audio duration (%.2fs) exceeds %.0fs. Truncating.",
                buffer.duration, self.config.max_duration,
            )
            buffer = buffer.truncate(self.config.max_duration)
            truncated = True

        mono = buffer.to_mono()
        sr = buffer.sample_rate

        notes = self.transcriber.transcribe(mono, sr)
        if not notes:
            logger.warning("No notes detected in audio. Using synthetic notes.")
            notes = synthetic_notes(buffer.duration)

        tempo = self.tempo_estimator.estimate(mono, sr)
        key = self.key_estimator.estimate(notes)
        time_signature = self.meter_estimator.estimate(notes, tempo)

        kept = self.cleaner.filter_notes(notes)
        if not kept:
            logger.warning("No notes left after filtering. Using synthetic notes.")
            return self._package(tempo, key, time_signature, synthetic_notes(buffer.duration), truncated)

        kept = self.cleaner.sort_notes(kept)
        merged = self.cleaner.merge_adjacent(kept)
        logger.debug(
            "Kept %d of %d notes (%d merged)", len(merged), len(notes), len(kept) - len(merged)
        )

        return self._package(tempo, key, time_signature, merged, truncated)

    def _package(
        self,
        tempo: float,
        key: str,
        time_signature: str,
        notes: List[Note],
        truncated: bool,
    ) -> AnalysisResult:
        return AnalysisResult(
            tempo=max(self.config.min_tempo, round_half_up(tempo)),
            key=key,
            time_signature=time_signature or C.DEFAULT_TIME_SIGNATURE,
            notes=tuple(notes),
            truncated=truncated,
        )


def default_result() -> AnalysisResult:
    """Result returned when analysis fails outright."""
    return AnalysisResult(
        tempo=C.DEFAULT_TEMPO,
        key=C.DEFAULT_KEY,
        time_signature=C.DEFAULT_TIME_SIGNATURE,
        notes=tuple(synthetic_notes(C.FALLBACK_DURATION)),
        truncated=False,
    )


def analyze(
    buffer: AudioBuffer,
    config: Optional[AnalysisConfig] = None,
    pitch_detector: Optional[PitchDetector] = None,
) -> AnalysisResult:
    """Analyze a decoded buffer with a one-off pipeline."""
    return AnalysisPipeline(config, pitch_detector).analyze(buffer)
