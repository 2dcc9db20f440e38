"""Inference layer - Musical understanding from notes.

This layer builds higher-level descriptions from detected notes:
- Key detection (tonal center)
- Time signature guess (simple vs compound)

Pipeline: Notes -> [Key, Meter]
"""

from .key import KeyEstimator, KeyInfo
from .meter import TimeSignatureEstimator

__all__ = [
    "KeyEstimator",
    "KeyInfo",
    "TimeSignatureEstimator",
]
