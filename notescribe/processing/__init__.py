"""Processing layer - Note-level post-processing.

This layer refines detected notes:
- Note cleanup (filter, sort, merge)
- Synthetic placeholder notes for empty detections
"""

from .cleanup import NoteCleanup, CleanupStats
from .synthetic import synthetic_notes

__all__ = [
    "NoteCleanup",
    "CleanupStats",
    "synthetic_notes",
]
