"""Recursive radix-2 Cooley-Tukey transform for real input frames."""

from __future__ import annotations

import math

import numpy as np

from .dsp import is_pow2, next_pow2


def fft(x) -> np.ndarray:
    """Return the complex spectrum of ``x``, length ``next_pow2(len(x))``.

    Inputs whose length is not a power of two are zero-padded once before
    the descent.
    """
    data = np.asarray(x, dtype=np.float64)
    if data.ndim != 1:
        raise ValueError("fft espera um vetor 1-D")
    if data.size == 0:
        raise ValueError("fft de sequencia vazia")

    if not is_pow2(data.size):
        padded = np.zeros(next_pow2(data.size), dtype=np.float64)
        padded[: data.size] = data
        data = padded

    return _radix2(data.astype(np.complex128))


def _radix2(x: np.ndarray) -> np.ndarray:
    n = x.size
    if n == 1:
        return x.copy()

    even = _radix2(x[0::2])
    odd = _radix2(x[1::2])

    half = n // 2
    angle = -2.0 * math.pi * np.arange(half) / n
    twiddled = (np.cos(angle) + 1j * np.sin(angle)) * odd

    out = np.empty(n, dtype=np.complex128)
    out[:half] = even + twiddled
    out[half:] = even - twiddled
    return out


def interleave(spectrum: np.ndarray) -> np.ndarray:
    """Flatten a complex spectrum into ``[re0, im0, re1, im1, ...]``."""
    spectrum = np.asarray(spectrum, dtype=np.complex128)
    out = np.empty(2 * spectrum.size, dtype=np.float64)
    out[0::2] = spectrum.real
    out[1::2] = spectrum.imag
    return out


def power_spectrum(spectrum: np.ndarray) -> np.ndarray:
    return spectrum.real ** 2 + spectrum.imag ** 2
