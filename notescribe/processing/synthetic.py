"""Placeholder notes used when nothing usable was detected."""

import math
from typing import List

from ..core import Note, constants as C


def synthetic_notes(duration: float) -> List[Note]:
    """
    Build a deterministic ascending C-major pattern.

    One note every half second for the given duration (at least eight
    notes), each sounding for 90% of its slot at velocity 80.

    Args:
        duration: Length of the audio the notes stand in for, in seconds

    Returns:
        List of placeholder notes
    """
    count = max(C.SYNTHETIC_MIN_NOTES, int(math.floor(duration / C.SYNTHETIC_STEP)))
    pitches = C.SYNTHETIC_PITCHES

    return [
        Note(
            pitch=pitches[i % len(pitches)],
            start_time=i * C.SYNTHETIC_STEP,
            duration=C.SYNTHETIC_STEP * C.SYNTHETIC_DUTY,
            velocity=C.SYNTHETIC_VELOCITY,
        )
        for i in range(count)
    ]
