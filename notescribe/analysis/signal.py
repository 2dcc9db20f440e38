"""Small numeric helpers shared by the analyzers."""

import math
from typing import Sequence

import numpy as np


def rms(buffer: np.ndarray) -> float:
    """Root-mean-square energy of a buffer (0.0 for an empty buffer)."""
    buffer = np.asarray(buffer, dtype=np.float64)
    if buffer.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(buffer**2)))


def median(values: Sequence[float]) -> float:
    """Median of a small window; even-length windows average the middle pair."""
    if len(values) == 0:
        return 0.0
    return float(np.median(np.asarray(values, dtype=np.float64)))


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def frame_starts(n_samples: int, frame_size: int, hop_size: int) -> range:
    """Start offsets of every full frame; a trailing partial frame is dropped."""
    if n_samples < frame_size:
        return range(0)
    return range(0, n_samples - frame_size + 1, hop_size)
