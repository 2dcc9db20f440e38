"""Pitch naming and frame-level pitch detection."""

import math
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np
import librosa

from ..core.constants import (
    A4_FREQ,
    A4_MIDI,
    MAX_CENTS_DEVIATION,
    MIN_PITCH_FREQ,
    PIANO_MAX,
    PIANO_MIN,
    PITCH_NAMES,
)
from ..core.note import NOTE_NAME_RE


def freq_to_midi(freq: float) -> int:
    """Convert frequency (Hz) to the nearest MIDI pitch."""
    return int(round(A4_MIDI + 12 * math.log2(freq / A4_FREQ)))


def midi_to_freq(midi: int) -> float:
    """Convert MIDI pitch to its equal-tempered frequency (Hz)."""
    return A4_FREQ * (2 ** ((midi - A4_MIDI) / 12.0))


def note_name(frequency: float) -> str:
    """
    Name the piano key closest to a frequency.

    Args:
        frequency: Frequency in Hz

    Returns:
        Note name such as "A4" or "F#5", or "" when the frequency is not a
        usable pitch (too low, outside the piano range, or more than a
        quarter tone away from the nearest key).
    """
    if not math.isfinite(frequency) or frequency <= MIN_PITCH_FREQ:
        return ""

    midi = freq_to_midi(frequency)
    if midi < PIANO_MIN or midi > PIANO_MAX:
        return ""

    cents = 1200 * math.log2(frequency / midi_to_freq(midi))
    if abs(cents) > MAX_CENTS_DEVIATION:
        return ""

    return f"{PITCH_NAMES[midi % 12]}{midi // 12 - 1}"


def note_name_to_midi(name: str) -> Optional[int]:
    """Convert a note name ("C4") to its MIDI number, None if malformed."""
    match = NOTE_NAME_RE.match(name or "")
    if match is None:
        return None
    return (int(match.group(2)) + 1) * 12 + PITCH_NAMES.index(match.group(1))


class PitchDetector(ABC):
    """Estimates the fundamental of one short frame of samples."""

    @abstractmethod
    def find_pitch(self, frame: np.ndarray, sample_rate: int) -> Tuple[float, float]:
        """
        Detect the pitch of a frame.

        Args:
            frame: Mono samples
            sample_rate: Sample rate

        Returns:
            Tuple of (frequency in Hz, clarity in [0, 1]). A frequency of 0
            means no pitch was found.
        """
        pass


class McLeodPitchDetector(PitchDetector):
    """McLeod Pitch Method (normalized square difference function).

    The clarity score is the height of the chosen NSDF peak, so a clean
    periodic tone scores close to 1.0 and noise scores low.
    """

    def __init__(self, cutoff: float = 0.9, max_lag_ratio: float = 1.0):
        """
        Initialize McLeodPitchDetector.

        Args:
            cutoff: Pick the first key maximum above cutoff * highest maximum
            max_lag_ratio: Fraction of the frame searched for a period
        """
        self.cutoff = cutoff
        self.max_lag_ratio = max_lag_ratio

    def find_pitch(self, frame: np.ndarray, sample_rate: int) -> Tuple[float, float]:
        frame = np.asarray(frame, dtype=np.float64)
        nsdf = self._nsdf(frame)
        max_lag = max(3, int(len(frame) * self.max_lag_ratio))
        nsdf = nsdf[:max_lag]

        peaks = self._key_maxima(nsdf)
        if not peaks:
            return 0.0, 0.0

        highest = max(nsdf[i] for i in peaks)
        chosen = next(i for i in peaks if nsdf[i] >= self.cutoff * highest)
        lag, clarity = self._refine(nsdf, chosen)
        if lag <= 0:
            return 0.0, 0.0

        return sample_rate / lag, float(min(clarity, 1.0))

    def _nsdf(self, frame: np.ndarray) -> np.ndarray:
        """Normalized square difference for every lag of the frame."""
        n = len(frame)
        if n == 0:
            return np.zeros(0)

        # Autocorrelation via zero-padded FFT
        n_fft = 1 << (2 * n - 1).bit_length()
        spectrum = np.fft.rfft(frame, n_fft)
        acf = np.fft.irfft(spectrum * np.conj(spectrum), n_fft)[:n]

        # m(lag) = sum of squares over both overlapping windows
        energy = np.concatenate([[0.0], np.cumsum(frame**2)])
        lags = np.arange(n)
        m = energy[n - lags] + (energy[n] - energy[lags])

        nsdf = np.zeros(n)
        nonzero = m > 0
        nsdf[nonzero] = 2 * acf[nonzero] / m[nonzero]
        return nsdf

    def _key_maxima(self, nsdf: np.ndarray) -> list:
        """Highest point of every positive lobe after the first zero crossing."""
        body = nsdf[: len(nsdf) - 1]
        prev, cur = body[:-1], body[1:]
        rising = np.flatnonzero((prev <= 0) & (cur > 0)) + 1
        falling = np.flatnonzero((prev > 0) & (cur <= 0)) + 1

        peaks = []
        for start in rising:
            ends = falling[falling > start]
            if len(ends) == 0:
                break  # lobe still open at the end of the search range
            end = ends[0]
            peaks.append(int(start + np.argmax(nsdf[start:end])))
        return peaks

    def _refine(self, nsdf: np.ndarray, idx: int) -> Tuple[float, float]:
        """Parabolic interpolation around a peak, returns (lag, height)."""
        if idx <= 0 or idx >= len(nsdf) - 1:
            return float(idx), float(nsdf[idx])

        y0, y1, y2 = nsdf[idx - 1], nsdf[idx], nsdf[idx + 1]
        denom = y0 - 2 * y1 + y2
        if denom == 0:
            return float(idx), float(y1)

        delta = 0.5 * (y0 - y2) / denom
        return idx + delta, float(y1 - 0.25 * (y0 - y2) * delta)


class PyinPitchDetector(PitchDetector):
    """Probabilistic YIN from librosa, clarity is the voiced probability."""

    def __init__(
        self,
        fmin: float = 65.0,  # C2
        fmax: float = 2093.0,  # C7
    ):
        self.fmin = fmin
        self.fmax = fmax

    def find_pitch(self, frame: np.ndarray, sample_rate: int) -> Tuple[float, float]:
        frame = np.asarray(frame, dtype=np.float64)
        f0, voiced_flag, voiced_prob = librosa.pyin(
            frame,
            fmin=self.fmin,
            fmax=self.fmax,
            sr=sample_rate,
            frame_length=len(frame),
            hop_length=len(frame),
            center=False,
        )

        if len(f0) == 0 or not voiced_flag[0] or np.isnan(f0[0]):
            return 0.0, 0.0

        return float(f0[0]), float(voiced_prob[0])


DETECTORS = {
    "mpm": McLeodPitchDetector,
    "pyin": PyinPitchDetector,
}


def get_pitch_detector(name: str = "mpm") -> PitchDetector:
    """Create a pitch detector by name ('mpm' or 'pyin')."""
    try:
        return DETECTORS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown pitch detector: {name}. Available: {sorted(DETECTORS)}"
        ) from None
