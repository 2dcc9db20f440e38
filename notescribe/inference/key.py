"""Key detection - Identify the tonal center of a note list.

Implements the Krumhansl-Schmuckler method: a duration and velocity
weighted pitch-class histogram is scored against major and minor key
profiles rotated to each of the 12 roots.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..core import Note, PITCH_NAMES, KEY_UNKNOWN

PITCH_CLASS_RE = re.compile(r"^([A-G]#?)")


@dataclass
class KeyInfo:
    """Container for key detection results."""

    root: Optional[str]  # Key root note (e.g., "C", "F#"), None if unknown
    mode: Optional[str]  # "Major" or "Minor", None if unknown
    correlation: float = 0.0
    pitch_class_distribution: np.ndarray = field(default_factory=lambda: np.zeros(12))

    @property
    def name(self) -> str:
        if self.root is None:
            return KEY_UNKNOWN
        return f"{self.root} {self.mode}"


class KeyEstimator:
    """Estimate the musical key of a list of notes."""

    # Krumhansl-Schmuckler key profiles (cognitive-based)
    KRUMHANSL_MAJOR = np.array(
        [6.35, 2.23, 3.48, 2.33, 4.38, 4.09, 2.52, 5.19, 2.39, 3.66, 2.29, 2.88]
    )
    KRUMHANSL_MINOR = np.array(
        [6.33, 2.68, 3.52, 5.38, 2.60, 3.53, 2.54, 4.75, 3.98, 2.69, 3.34, 3.17]
    )

    def __init__(self):
        self.major_profile = self._normalize(self.KRUMHANSL_MAJOR)
        self.minor_profile = self._normalize(self.KRUMHANSL_MINOR)

    def estimate(self, notes: List[Note]) -> str:
        """
        Estimate the key of a note list.

        Returns:
            "<Root> Major", "<Root> Minor", or KEY_UNKNOWN when no note
            carries weight
        """
        return self.analyze(notes).name

    def analyze(self, notes: List[Note]) -> KeyInfo:
        """
        Perform full key analysis.

        Args:
            notes: List of notes

        Returns:
            KeyInfo with the best root/mode and the pitch-class distribution
        """
        counts = np.zeros(12)
        total = 0.0

        for note in notes:
            pc = self._pitch_class(note)
            if pc is None:
                continue
            # Longer and louder notes count more; silent notes keep half weight
            weight = note.duration * (0.5 + note.velocity / 254)
            counts[pc] += weight
            total += weight

        if total == 0:
            return KeyInfo(root=None, mode=None, pitch_class_distribution=counts)

        distribution = counts / total

        best_root = 0
        best_major = True
        best_score = -np.inf
        # Strict comparison: ties keep the first root, and major before minor
        for root in range(12):
            rotation = [(j - root + 12) % 12 for j in range(12)]
            major_score = float(np.dot(distribution, self.major_profile[rotation]))
            minor_score = float(np.dot(distribution, self.minor_profile[rotation]))
            if major_score > best_score:
                best_root, best_major, best_score = root, True, major_score
            if minor_score > best_score:
                best_root, best_major, best_score = root, False, minor_score

        return KeyInfo(
            root=PITCH_NAMES[best_root],
            mode="Major" if best_major else "Minor",
            correlation=best_score,
            pitch_class_distribution=distribution,
        )

    def _pitch_class(self, note: Note) -> Optional[int]:
        if not isinstance(note.pitch, str):
            return None
        match = PITCH_CLASS_RE.match(note.pitch)
        if match is None:
            return None
        return PITCH_NAMES.index(match.group(1))

    @staticmethod
    def _normalize(profile: np.ndarray) -> np.ndarray:
        total = profile.sum()
        if total == 0:
            return np.zeros_like(profile)
        return profile / total
