"""Note and result data classes - the output of audio analysis."""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .constants import PITCH_NAMES

NOTE_NAME_RE = re.compile(r"^([A-G]#?)(-?\d+)$")


@dataclass(frozen=True)
class Note:
    """Represents a detected musical note."""

    pitch: str  # Note name (e.g., "C4", "F#5"), "" for a rest
    start_time: float  # Start time in seconds
    duration: float  # Duration in seconds
    velocity: int = 64  # MIDI velocity (0-127)

    @property
    def end_time(self) -> float:
        """Note end time in seconds."""
        return self.start_time + self.duration

    @property
    def is_rest(self) -> bool:
        return not self.pitch

    @property
    def is_well_formed(self) -> bool:
        """True if the pitch is a '<Letter><#?><Octave>' note name."""
        return isinstance(self.pitch, str) and NOTE_NAME_RE.match(self.pitch) is not None

    @property
    def pitch_class(self) -> Optional[int]:
        """Get pitch class (0-11, where 0=C), None for rests."""
        match = NOTE_NAME_RE.match(self.pitch or "")
        if match is None:
            return None
        return PITCH_NAMES.index(match.group(1))

    @property
    def midi(self) -> Optional[int]:
        """Get MIDI pitch number, None for rests."""
        match = NOTE_NAME_RE.match(self.pitch or "")
        if match is None:
            return None
        return (int(match.group(2)) + 1) * 12 + PITCH_NAMES.index(match.group(1))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dictionary shape used by notation consumers."""
        return {
            "pitch": self.pitch,
            "startTime": self.start_time,
            "duration": self.duration,
            "velocity": self.velocity,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Symbolic description of one analyzed recording."""

    tempo: int  # BPM, within [60, 180]
    key: str  # e.g. "C Major", "A Minor"
    time_signature: str  # "4/4" or "6/8"
    notes: Tuple[Note, ...] = field(default_factory=tuple)
    truncated: bool = False  # Source was longer than the analyzable maximum

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "tempo": self.tempo,
            "key": self.key,
            "timeSignature": self.time_signature,
            "notes": [note.to_dict() for note in self.notes],
            "truncated": self.truncated,
        }
