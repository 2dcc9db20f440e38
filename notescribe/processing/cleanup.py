"""Note cleanup - Filter and merge detected notes.

This module turns raw detector output into the final note list:
- Short note removal (below the minimum duration)
- Malformed pitch removal (rests, unparseable names)
- Ordering by start time
- Merging same-pitch notes split by a brief detector dropout
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple, Union

from ..core import Note
from ..core.config import AnalysisConfig


@dataclass
class CleanupStats:
    """Statistics from cleanup operations."""

    original_count: int = 0
    final_count: int = 0
    removed_short_notes: int = 0
    removed_malformed: int = 0
    merged_notes: int = 0

    @property
    def total_removed(self) -> int:
        """Total notes removed (merged notes included)."""
        return self.original_count - self.final_count


class NoteCleanup:
    """Filter, sort and merge detected notes."""

    def __init__(
        self,
        min_duration: Optional[float] = None,
        merge_gap: Optional[float] = None,
        config: Optional[AnalysisConfig] = None,
    ):
        """Initialize NoteCleanup.

        Args:
            min_duration: Minimum note duration in seconds
            merge_gap: Same-pitch notes separated by less than this are merged
            config: AnalysisConfig supplying defaults for the above
        """
        config = config or AnalysisConfig()
        self.min_duration = config.min_note_duration if min_duration is None else min_duration
        self.merge_gap = config.merge_gap if merge_gap is None else merge_gap

    def cleanup(
        self,
        notes: List[Note],
        return_stats: bool = False,
    ) -> Union[List[Note], Tuple[List[Note], CleanupStats]]:
        """Filter, sort and merge.

        Args:
            notes: List of notes to clean
            return_stats: Whether to return cleanup statistics

        Returns:
            Cleaned notes sorted by start time, optionally with statistics
        """
        stats = CleanupStats(original_count=len(notes))

        well_formed = [n for n in notes if n.is_well_formed]
        stats.removed_malformed = len(notes) - len(well_formed)

        kept = self.filter_notes(well_formed)
        stats.removed_short_notes = len(well_formed) - len(kept)

        kept = self.sort_notes(kept)
        merged = self.merge_adjacent(kept)
        stats.merged_notes = len(kept) - len(merged)
        stats.final_count = len(merged)

        if return_stats:
            return merged, stats
        return merged

    def filter_notes(self, notes: List[Note]) -> List[Note]:
        """Drop notes that are too short or have no usable pitch."""
        return [
            n for n in notes
            if n.duration >= self.min_duration and n.is_well_formed
        ]

    def sort_notes(self, notes: List[Note]) -> List[Note]:
        """Order notes by start time (stable for equal starts)."""
        return sorted(notes, key=lambda n: n.start_time)

    def merge_adjacent(self, notes: List[Note]) -> List[Note]:
        """Merge neighbouring same-pitch notes separated by a short gap.

        Walks the list once. A note is folded into the running note when it
        has the same pitch and starts less than ``merge_gap`` seconds after
        the running note ends; the running note is extended to cover both.
        Running the pass on its own output changes nothing.

        Args:
            notes: Notes sorted by start time

        Returns:
            List with merged notes
        """
        if not notes:
            return []

        merged = [notes[0]]
        for note in notes[1:]:
            prev = merged[-1]
            gap = note.start_time - prev.end_time
            if note.pitch == prev.pitch and gap < self.merge_gap:
                end = max(prev.end_time, note.end_time)
                merged[-1] = replace(prev, duration=end - prev.start_time)
            else:
                merged.append(note)

        return merged
