"""Decoded audio buffer handed to the analysis pipeline."""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class AudioBuffer:
    """Planar PCM samples with their sample rate.

    Attributes:
        samples: Float array shaped (channels, n_samples). A 1-D array is
            treated as a single channel.
        sample_rate: Samples per second
    """

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self):
        samples = np.asarray(self.samples, dtype=np.float64)
        if samples.ndim == 1:
            samples = samples[np.newaxis, :]
        if samples.ndim != 2:
            raise ValueError(f"Expected 1-D or 2-D samples, got shape {samples.shape}")
        if self.sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {self.sample_rate}")
        object.__setattr__(self, "samples", samples)

    @property
    def num_channels(self) -> int:
        return self.samples.shape[0]

    @property
    def num_samples(self) -> int:
        return self.samples.shape[1]

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.num_samples / self.sample_rate

    def truncate(self, max_seconds: float) -> "AudioBuffer":
        """Return a buffer holding at most the first ``max_seconds``."""
        length = int(np.floor(max_seconds * self.sample_rate))
        return AudioBuffer(self.samples[:, :length], self.sample_rate)

    def to_mono(self) -> np.ndarray:
        """Mix all channels down to mono by per-sample averaging."""
        if self.num_channels == 1:
            return self.samples[0].copy()
        return self.samples.mean(axis=0)
