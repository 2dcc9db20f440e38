"""Audio loading - decode files into AudioBuffer objects."""

import logging
from pathlib import Path
from typing import Optional

import numpy as np
import librosa

from ..core import AudioBuffer, AudioDecodeError

logger = logging.getLogger(__name__)


class AudioLoader:
    """Handles audio file decoding."""

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a", ".mp4", ".aac", ".aiff"}

    def __init__(
        self,
        target_sr: Optional[int] = None,
        mono: bool = False,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Resample to this rate, None keeps the file's native rate
            mono: Mix down while decoding; the pipeline mixes down itself, so
                channels are kept by default
        """
        self.target_sr = target_sr
        self.mono = mono

    def load(self, path: str) -> AudioBuffer:
        """
        Decode an audio file.

        Args:
            path: Path to audio file

        Returns:
            AudioBuffer with planar float samples

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format not supported
            AudioDecodeError: If the file could not be decoded
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {sorted(self.SUPPORTED_FORMATS)}"
            )

        try:
            audio, sr = librosa.load(str(path), sr=self.target_sr, mono=self.mono)
        except Exception as e:
            raise AudioDecodeError(f"Audio could not be decoded: {path}") from e

        buffer = AudioBuffer(audio, int(sr))
        logger.debug(
            "Loaded %s: %.2fs, %d Hz, %d channel(s)",
            path.name, buffer.duration, buffer.sample_rate, buffer.num_channels,
        )
        return buffer

    @staticmethod
    def from_array(samples: np.ndarray, sr: int) -> AudioBuffer:
        """Wrap already-decoded samples (mono, or shaped (channels, n))."""
        return AudioBuffer(np.asarray(samples, dtype=np.float64), sr)
