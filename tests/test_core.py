"""Tests for core types and audio loading."""

import numpy as np
import pytest
import soundfile as sf

from notescribe.core import AnalysisConfig, AudioBuffer, AudioDecodeError, Note
from notescribe.input import AudioLoader


class TestNote:
    """Tests for Note dataclass."""

    def test_note_creation(self):
        note = Note(pitch="C4", start_time=0.5, duration=1.0, velocity=80)
        assert note.pitch == "C4"
        assert note.start_time == 0.5
        assert note.duration == 1.0
        assert note.velocity == 80
        assert note.end_time == 1.5

    def test_default_velocity(self):
        assert Note("C4", 0.0, 1.0).velocity == 64

    def test_midi_and_pitch_class(self):
        assert Note("C4", 0, 1).midi == 60
        assert Note("A4", 0, 1).midi == 69
        assert Note("C#4", 0, 1).pitch_class == 1
        assert Note("B-1", 0, 1).midi == 11

    def test_rest(self):
        rest = Note("", 0, 1)
        assert rest.is_rest
        assert not rest.is_well_formed
        assert rest.midi is None
        assert rest.pitch_class is None

    def test_well_formed(self):
        assert Note("F#5", 0, 1).is_well_formed
        assert not Note("Gb5", 0, 1).is_well_formed
        assert not Note("F#", 0, 1).is_well_formed

    def test_to_dict(self):
        assert Note("E4", 1.0, 0.5, 90).to_dict() == {
            "pitch": "E4",
            "startTime": 1.0,
            "duration": 0.5,
            "velocity": 90,
        }


class TestAudioBuffer:
    """Tests for AudioBuffer."""

    def test_mono_promoted_to_one_channel(self):
        buffer = AudioBuffer(np.zeros(100), 1000)
        assert buffer.num_channels == 1
        assert buffer.num_samples == 100
        assert buffer.duration == pytest.approx(0.1)

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            AudioBuffer(np.zeros((2, 2, 2)), 1000)

    def test_bad_sample_rate(self):
        with pytest.raises(ValueError):
            AudioBuffer(np.zeros(10), 0)

    def test_to_mono_averages_channels(self):
        buffer = AudioBuffer(np.array([[1.0, 0.0, 0.5], [0.0, 0.0, -0.5]]), 10)
        assert buffer.to_mono() == pytest.approx([0.5, 0.0, 0.0])

    def test_truncate(self):
        buffer = AudioBuffer(np.zeros((2, 1000)), 100)
        short = buffer.truncate(2.5)

        assert short.num_channels == 2
        assert short.num_samples == 250
        # Shorter buffers pass through unchanged
        assert buffer.truncate(60).num_samples == 1000


class TestAnalysisConfig:
    """Tests for AnalysisConfig validation."""

    def test_defaults(self):
        config = AnalysisConfig()
        assert config.frame_size == 2048
        assert config.hop_size == 441
        assert config.min_tempo == 60
        assert config.max_tempo == 180
        assert config.max_duration == 60

    def test_invalid_tempo_band(self):
        with pytest.raises(ValueError, match="min_tempo"):
            AnalysisConfig(min_tempo=200)

    def test_invalid_frame(self):
        with pytest.raises(ValueError):
            AnalysisConfig(hop_size=0)

    def test_invalid_max_duration(self):
        with pytest.raises(ValueError):
            AnalysisConfig(max_duration=0)


class TestAudioLoader:
    """Tests for AudioLoader."""

    def test_load_stereo_wav(self, tmp_path):
        sr = 22050
        t = np.arange(sr) / sr
        left = 0.5 * np.sin(2 * np.pi * 440 * t)
        right = 0.25 * np.sin(2 * np.pi * 660 * t)
        path = tmp_path / "stereo.wav"
        sf.write(str(path), np.stack([left, right], axis=1), sr)

        buffer = AudioLoader().load(str(path))

        assert buffer.sample_rate == sr
        assert buffer.num_channels == 2
        assert buffer.num_samples == sr
        assert buffer.samples[0] == pytest.approx(left, abs=1e-3)

    def test_load_mono_resampled(self, tmp_path):
        path = tmp_path / "mono.wav"
        sf.write(str(path), np.zeros(44100), 44100)

        buffer = AudioLoader(target_sr=22050).load(str(path))

        assert buffer.sample_rate == 22050
        assert buffer.num_channels == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AudioLoader().load(str(tmp_path / "missing.wav"))

    def test_unsupported_format(self, tmp_path):
        dummy_file = tmp_path / "test.xyz"
        dummy_file.write_text("dummy content")

        with pytest.raises(ValueError, match="Unsupported format"):
            AudioLoader().load(str(dummy_file))

    def test_undecodable_file(self, tmp_path):
        bad_file = tmp_path / "broken.wav"
        bad_file.write_bytes(b"this is not audio")

        with pytest.raises(AudioDecodeError):
            AudioLoader().load(str(bad_file))

    def test_from_array(self):
        buffer = AudioLoader.from_array(np.zeros((2, 50), dtype=np.float32), 100)
        assert buffer.num_channels == 2
        assert buffer.samples.dtype == np.float64
