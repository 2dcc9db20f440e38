"""Tests for pitch naming and frame pitch detectors."""

import numpy as np
import pytest

from notescribe.analysis import (
    McLeodPitchDetector,
    PyinPitchDetector,
    freq_to_midi,
    get_pitch_detector,
    midi_to_freq,
    note_name,
    note_name_to_midi,
)
from notescribe.analysis.signal import median, rms, round_half_up, frame_starts


def sine(freq: float, n_samples: int, sr: int, amplitude: float = 0.5) -> np.ndarray:
    t = np.arange(n_samples) / sr
    return amplitude * np.sin(2 * np.pi * freq * t)


class TestNoteName:
    """Tests for frequency to note name conversion."""

    def test_reference_pitches(self):
        assert note_name(440.0) == "A4"
        assert note_name(261.63) == "C4"
        assert note_name(880.0) == "A5"
        assert note_name(midi_to_freq(78)) == "F#5"

    def test_too_low_is_empty(self):
        assert note_name(5) == ""
        assert note_name(10.0) == ""
        assert note_name(0.0) == ""
        assert note_name(-440.0) == ""

    def test_non_finite_is_empty(self):
        assert note_name(float("nan")) == ""
        assert note_name(float("inf")) == ""

    def test_rounds_to_nearest_key(self):
        # ~46 cents sharp of A4 still names A4
        assert note_name(452.0) == "A4"
        # Past the quarter tone the nearest key is A#4, within a few cents
        assert note_name(453.5) == "A#4"
        assert note_name(466.5) == "A#4"

    def test_piano_range(self):
        assert note_name(27.5) == "A0"
        assert note_name(4186.01) == "C8"
        assert note_name(midi_to_freq(20)) == ""
        assert note_name(midi_to_freq(109)) == ""

    def test_name_to_midi(self):
        assert note_name_to_midi("A4") == 69
        assert note_name_to_midi("C4") == 60
        assert note_name_to_midi("C#4") == 61
        assert note_name_to_midi("") is None
        assert note_name_to_midi("H2") is None

    def test_midi_roundtrip_for_piano_keys(self):
        for midi in (21, 60, 69, 108):
            assert freq_to_midi(midi_to_freq(midi)) == midi
            assert note_name_to_midi(note_name(midi_to_freq(midi))) == midi


class TestSignalHelpers:
    """Tests for RMS, median and rounding helpers."""

    def test_rms(self):
        assert rms(np.array([])) == 0.0
        assert rms(np.zeros(100)) == 0.0
        assert rms(np.ones(10) * 0.5) == pytest.approx(0.5)

    def test_median(self):
        assert median([]) == 0.0
        assert median([3.0, 1.0, 2.0]) == 2.0
        assert median([1.0, 4.0]) == 2.5
        assert median([0.0, 440.0, 440.0]) == 440.0

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4999) == 2
        assert round_half_up(-0.5) == 0

    def test_frame_starts_drop_partial_frame(self):
        assert list(frame_starts(10, 4, 3)) == [0, 3, 6]
        assert list(frame_starts(3, 4, 3)) == []
        assert list(frame_starts(4, 4, 3)) == [0]


class TestMcLeodPitchDetector:
    """Tests for the NSDF-based detector."""

    @pytest.mark.parametrize("freq", [220.0, 440.0, 523.25, 880.0])
    def test_pure_tone(self, freq):
        sr = 44100
        frame = sine(freq, 2048, sr)

        detected, clarity = McLeodPitchDetector().find_pitch(frame, sr)

        assert detected == pytest.approx(freq, rel=0.01)
        assert clarity >= 0.88
        assert clarity <= 1.0

    def test_tone_with_harmonics(self):
        sr = 44100
        frame = sine(220.0, 2048, sr) + sine(440.0, 2048, sr, 0.2) + sine(660.0, 2048, sr, 0.1)

        detected, clarity = McLeodPitchDetector().find_pitch(frame, sr)

        assert note_name(detected) == "A3"
        assert clarity >= 0.88

    def test_silence(self):
        assert McLeodPitchDetector().find_pitch(np.zeros(2048), 44100) == (0.0, 0.0)


class TestPyinPitchDetector:
    """Tests for the librosa pyin detector on single frames."""

    def test_pure_tone(self):
        sr = 44100
        frame = sine(440.0, 2048, sr)

        detected, clarity = PyinPitchDetector().find_pitch(frame, sr)

        assert detected == pytest.approx(440.0, rel=0.01)
        assert 0.88 <= clarity <= 1.0
        assert note_name(detected) == "A4"

    def test_silence_is_unvoiced(self):
        assert PyinPitchDetector().find_pitch(np.zeros(2048), 44100) == (0.0, 0.0)


class TestDetectorFactory:
    """Tests for get_pitch_detector."""

    def test_known_names(self):
        assert isinstance(get_pitch_detector("mpm"), McLeodPitchDetector)
        assert isinstance(get_pitch_detector("PYIN"), PyinPitchDetector)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown pitch detector"):
            get_pitch_detector("crepe")
