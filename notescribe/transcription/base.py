"""Transcriber interface used by the analysis pipeline."""

from abc import ABC, abstractmethod
from typing import List

import numpy as np

from ..core import Note


class Transcriber(ABC):
    """Turns a mono buffer into note events.

    The pipeline only talks to this interface, so any note source (the
    frame-based ``NoteDetector``, a precomputed note list, a different
    tracker) can be dropped into ``AnalysisPipeline(transcriber=...)``.
    """

    @abstractmethod
    def transcribe(self, audio: np.ndarray, sr: int) -> List[Note]:
        """
        Args:
            audio: Mono audio array (already mixed down and truncated)
            sr: Sample rate

        Returns:
            Notes in detection order; an empty list means nothing was found
            and the pipeline substitutes placeholder notes
        """
