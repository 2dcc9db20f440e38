"""Time signature guess from note onsets.

A coarse heuristic: onsets that line up with beats and half beats vote for
simple time, onsets that line up with dotted-quarter spans vote for
compound time. Only 4/4 and 6/8 can be reported.
"""

from typing import List

from ..core import Note, constants as C


class TimeSignatureEstimator:
    """Guess between simple (4/4) and compound (6/8) time."""

    def __init__(self, tolerance: float = C.METER_TOLERANCE, compound_bias: float = C.COMPOUND_BIAS):
        """
        Args:
            tolerance: Alignment window as a fraction of one beat
            compound_bias: Compound score must beat common score by this factor
        """
        self.tolerance = tolerance
        self.compound_bias = compound_bias

    def estimate(self, notes: List[Note], tempo: float) -> str:
        if len(notes) < C.MIN_METER_NOTES or tempo <= 0:
            return C.DEFAULT_TIME_SIGNATURE

        beat = 60.0 / tempo
        window = beat * self.tolerance
        half_beat = beat / 2
        dotted_quarter = beat * 1.5
        three_eighths = half_beat * 3

        common = 0.0
        compound = 0.0
        for note in notes:
            t = note.start_time
            if self._aligned(t, beat, window):
                common += 1
            if self._aligned(t, half_beat, window):
                common += 0.5
            if self._aligned(t, dotted_quarter, window):
                compound += 1
            if self._aligned(t, three_eighths, window):
                compound += 0.5

        if compound > common * self.compound_bias:
            return C.COMPOUND_TIME
        return C.COMMON_TIME

    @staticmethod
    def _aligned(time: float, period: float, window: float) -> bool:
        """True if time falls within window of a multiple of period."""
        offset = time % period
        return offset < window or offset > period - window
