"""
Tests for pitchdetect/fft.py: recursive radix-2 transform.

Validates:
    - Agreement with numpy.fft for power-of-two and padded lengths
    - Base case and precondition on empty input
    - Dominant bin of a pure sinusoid
"""

import numpy as np
import pytest

from pitchdetect.fft import fft, interleave, power_spectrum


class TestFFT:
    def test_matches_numpy_for_power_of_two(self):
        rng = np.random.default_rng(7)
        x = rng.standard_normal(256)
        np.testing.assert_allclose(fft(x), np.fft.fft(x), atol=1e-9)

    def test_pads_to_next_power_of_two(self):
        """Length 1000 is zero-padded to 1024 before transforming."""
        rng = np.random.default_rng(11)
        x = rng.standard_normal(1000)
        out = fft(x)
        assert out.size == 1024
        np.testing.assert_allclose(out, np.fft.fft(x, n=1024), atol=1e-9)

    def test_padded_equals_transform_of_padded_sequence(self):
        x = np.arange(100, dtype=np.float64)
        padded = np.concatenate([x, np.zeros(28)])
        np.testing.assert_array_equal(fft(x), fft(padded))

    def test_single_element(self):
        np.testing.assert_array_equal(fft([3.0]), [3.0 + 0.0j])

    def test_empty_input_raises(self):
        with pytest.raises(ValueError):
            fft([])

    def test_two_dimensional_input_raises(self):
        with pytest.raises(ValueError):
            fft(np.zeros((4, 4)))

    def test_sinusoid_dominant_bin(self):
        """Peak bin k lands within one bin of f0 * M / fs."""
        fs, f0, n = 8000, 440.0, 1000
        x = np.sin(2 * np.pi * f0 * np.arange(n) / fs)
        power = power_spectrum(fft(x))
        m = power.size
        k = int(np.argmax(power[: m // 2]))
        assert abs(k - f0 * m / fs) <= 1.0

    def test_deterministic(self):
        x = np.cos(np.arange(512) * 0.3)
        np.testing.assert_array_equal(fft(x), fft(x))


class TestInterleave:
    def test_layout(self):
        out = interleave(np.array([1 + 2j, 3 - 4j]))
        np.testing.assert_array_equal(out, [1.0, 2.0, 3.0, -4.0])

    def test_length_is_twice_padded_size(self):
        assert interleave(fft(np.ones(100))).size == 2 * 128
