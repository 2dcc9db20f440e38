"""Tests for onset-based tempo estimation."""

import numpy as np
import pytest

from notescribe.analysis import TempoEstimator
from notescribe.core import AnalysisConfig

# 2**14 Hz puts every 0.125s step on the 256-sample onset hop grid
SR = 16384


def click_track(
    period: float,
    n_pulses: int = 12,
    pulse_length: float = 0.1,
    freq: float = 1000.0,
    amplitude: float = 0.5,
    sr: int = SR,
) -> np.ndarray:
    """Tone bursts every ``period`` seconds, starting one period in."""
    total = int(round((n_pulses + 1) * period * sr)) + sr
    audio = np.zeros(total)
    n_burst = int(pulse_length * sr)
    t = np.arange(n_burst) / sr
    burst = amplitude * np.sin(2 * np.pi * freq * t)
    for k in range(1, n_pulses + 1):
        start = int(round(k * period * sr))
        audio[start:start + n_burst] = burst
    return audio


class TestTempoEstimator:
    """Tests for TempoEstimator."""

    def test_120_bpm_clicks(self):
        audio = click_track(0.5)
        assert TempoEstimator().estimate(audio, SR) == 120

    def test_160_bpm_clicks(self):
        audio = click_track(0.375)
        assert TempoEstimator().estimate(audio, SR) == 160

    def test_slow_clicks_fold_into_band(self):
        # 40 BPM is below the band; half the interval reads as 80 BPM
        audio = click_track(1.5)
        info = TempoEstimator().analyze(audio, SR)

        assert info.bpm == 80
        assert not info.is_default
        assert info.ioi_candidates == pytest.approx([0.75] * 11)

    def test_clicks_off_the_hop_grid(self):
        # At 44.1 kHz a click straddles two onset frames and triggers twice.
        # The one-hop intervals are dropped, the rest run one hop short of 0.5s.
        sr = 44100
        audio = click_track(0.5, sr=sr)
        info = TempoEstimator().analyze(audio, sr)

        assert len(info.onset_times) > 12
        assert not info.is_default
        assert info.bpm == pytest.approx(120, abs=5)

    def test_one_onset_per_click(self):
        audio = click_track(0.5)
        onsets = TempoEstimator().detect_onsets(audio, SR)

        assert len(onsets) == 12
        assert np.diff(onsets) == pytest.approx([0.5] * 11)

    def test_too_few_onsets_returns_default(self):
        audio = click_track(0.375, n_pulses=5)
        info = TempoEstimator().analyze(audio, SR)

        assert info.bpm == 120
        assert info.is_default
        assert len(info.onset_times) == 5

    def test_silence_returns_default(self):
        assert TempoEstimator().estimate(np.zeros(SR * 3), SR) == 120

    def test_short_buffer_returns_default(self):
        assert TempoEstimator().estimate(np.zeros(100), SR) == 120

    def test_quiet_clicks_ignored(self):
        # Below the absolute 0.01 RMS floor
        audio = click_track(0.5, amplitude=0.005)
        info = TempoEstimator().analyze(audio, SR)

        assert info.onset_times == []
        assert info.bpm == 120

    def test_custom_default_tempo(self):
        config = AnalysisConfig(default_tempo=100)
        assert TempoEstimator(config).estimate(np.zeros(SR), SR) == 100


class TestIntervalFolding:
    """Tests for inter-onset interval folding."""

    def test_in_band_kept(self):
        assert TempoEstimator().fold_intervals([0.0, 0.5, 1.0]) == [0.5, 0.5]

    def test_out_of_band_folded(self):
        candidates = TempoEstimator().fold_intervals([0.0, 0.2, 0.7, 2.2])
        # 0.2 doubles to 0.4, 0.5 stays, 1.5 halves to 0.75
        assert candidates == pytest.approx([0.4, 0.5, 0.75])

    def test_unfoldable_dropped(self):
        # 0.05s and 5s cannot be folded into [1/3, 1] by one factor of two
        assert TempoEstimator().fold_intervals([0.0, 0.05, 5.05]) == []

    def test_band_edges_inclusive(self):
        estimator = TempoEstimator()
        assert estimator.fold_intervals([0.0, 1.0]) == [1.0]
        assert estimator.fold_intervals([0.0, 60.0 / 180]) == [60.0 / 180]
