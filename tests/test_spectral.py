"""
Tests for pitchdetect/spectral.py: windowed FFT peak picking.
"""

import numpy as np
import pytest

from pitchdetect import spectral
from pitchdetect.dsp import apply_window, sine_frame
from pitchdetect.estimator import NO_PITCH, EstimatorKind
from pitchdetect.spectral import SpectralEstimator, spectral_peak


@pytest.fixture
def estimator():
    return SpectralEstimator()


class TestSpectralEstimator:
    def test_short_frame_returns_sentinel(self, estimator):
        frame = sine_frame(440.0, 8000, 63)
        assert estimator.estimate(frame, 8000) == NO_PITCH

    def test_silence_returns_sentinel(self, estimator):
        """All-zero 8192-sample frame at 8 kHz has no pitch."""
        assert estimator.estimate(np.zeros(8192, dtype=np.int16), 8000) == 0.0

    def test_a440(self, estimator):
        """8192-sample 440 Hz sine at 8 kHz lands on bin 451."""
        hz = estimator.estimate(sine_frame(440.0, 8000, 8192), 8000)
        assert 430.0 <= hz <= 450.0
        assert hz == pytest.approx(451 * 8000 / 8192)

    def test_non_power_of_two_frame(self, estimator):
        """1000 samples are padded to 1024, bin spacing 8000/1024."""
        hz = estimator.estimate(sine_frame(440.0, 8000, 1000), 8000)
        assert hz == pytest.approx(56 * 8000 / 1024)

    def test_minimum_frame(self, estimator):
        hz = estimator.estimate(sine_frame(500.0, 8000, 64), 8000)
        assert 80.0 <= hz <= 1000.0

    def test_deterministic(self, estimator):
        frame = sine_frame(330.0, 8000, 4096)
        assert estimator.estimate(frame, 8000) == estimator.estimate(frame.copy(), 8000)

    def test_metadata(self, estimator):
        assert estimator.kind is EstimatorKind.SPECTRAL
        assert estimator.min_frame_size == 64
        assert estimator.band.inclusive
        assert (estimator.band.low, estimator.band.high) == (80.0, 1000.0)


class TestSpectralPeak:
    def test_empty_band_returns_sentinel(self):
        """min_bin >= max_bin when the band is narrower than one bin."""
        windowed = apply_window(sine_frame(90.0, 8000, 64))
        assert spectral_peak(windowed, 8000, 80.0, 100.0) == NO_PITCH

    def test_first_bin_wins_ties(self, monkeypatch):
        crafted = np.zeros(64, dtype=np.complex128)
        crafted[5] = 3.0 + 4.0j
        crafted[9] = 4.0 - 3.0j
        monkeypatch.setattr(spectral, "fft", lambda x: crafted)
        assert spectral_peak(np.zeros(64), 64, 1.0, 40.0) == pytest.approx(5.0)

    def test_dc_bin_is_excluded(self, monkeypatch):
        crafted = np.zeros(64, dtype=np.complex128)
        crafted[0] = 100.0
        crafted[3] = 1.0
        monkeypatch.setattr(spectral, "fft", lambda x: crafted)
        assert spectral_peak(np.zeros(64), 64, 0.0, 40.0) == pytest.approx(3.0)

    def test_peak_outside_band_is_ignored(self, monkeypatch):
        crafted = np.zeros(64, dtype=np.complex128)
        crafted[30] = 10.0
        crafted[4] = 1.0
        monkeypatch.setattr(spectral, "fft", lambda x: crafted)
        assert spectral_peak(np.zeros(64), 64, 1.0, 20.0) == pytest.approx(4.0)
