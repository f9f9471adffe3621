from __future__ import annotations

import math

import numpy as np

from .band import BandFilter
from .dsp import apply_window
from .estimator import NO_PITCH, EstimatorKind, PitchEstimator
from .fft import fft, power_spectrum

MIN_FRAME_SIZE = 64
DEFAULT_BAND = (80.0, 1000.0)


def spectral_peak(windowed: np.ndarray, sample_rate: int, band_low: float, band_high: float) -> float:
    """Frequency of the strongest spectrum bin inside ``[band_low, band_high]``.

    ``windowed`` is a frame already passed through ``apply_window``. The bin
    spacing is ``sample_rate / M`` where M is the padded transform length.
    """
    if len(windowed) < MIN_FRAME_SIZE:
        return NO_PITCH

    spectrum = power_spectrum(fft(windowed))
    size = spectrum.size

    min_bin = max(1, int(math.floor(band_low * size / sample_rate)))
    max_bin = min(size - 1, int(math.floor(band_high * size / sample_rate)))
    if min_bin >= max_bin:
        return NO_PITCH

    # argmax keeps the first index on ties
    search = spectrum[min_bin : max_bin + 1]
    offset = int(np.argmax(search))
    if search[offset] <= 0.0:
        return NO_PITCH

    peak_bin = min_bin + offset
    return peak_bin * sample_rate / size


class SpectralEstimator(PitchEstimator):
    kind = EstimatorKind.SPECTRAL
    min_frame_size = MIN_FRAME_SIZE

    def __init__(self, band_low: float = DEFAULT_BAND[0], band_high: float = DEFAULT_BAND[1]):
        super().__init__(BandFilter(band_low, band_high, inclusive=True))

    def estimate(self, frame: np.ndarray, sample_rate: int) -> float:
        if len(frame) < self.min_frame_size:
            return NO_PITCH
        return spectral_peak(apply_window(frame), sample_rate, self.band.low, self.band.high)
