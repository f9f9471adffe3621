from __future__ import annotations

import numpy as np

from .band import BandFilter
from .estimator import NO_PITCH, EstimatorKind, PitchEstimator

MIN_FRAME_SIZE = 50
DEFAULT_LAG_SKIP = 30
DEFAULT_BAND = (80.0, 2000.0)


def autocorrelation_peak(samples, sample_rate: int, lag_skip: int = DEFAULT_LAG_SKIP) -> float:
    """Brute-force lag search over raw samples.

    Lags below ``lag_skip`` are ignored since the zero-lag energy dominates
    them. Cost is O(N^2); meant for small fixed frames.
    """
    x = np.asarray(samples, dtype=np.float64)
    n = x.size
    if n < MIN_FRAME_SIZE:
        return NO_PITCH

    best_lag = 0
    best_corr = 0.0
    for lag in range(lag_skip, n // 2):
        corr = float(np.dot(x[: n - lag], x[lag:]))
        if corr > best_corr:
            best_corr = corr
            best_lag = lag

    if best_lag == 0:
        return NO_PITCH
    return sample_rate / best_lag


class AutocorrelationEstimator(PitchEstimator):
    kind = EstimatorKind.AUTOCORRELATION
    min_frame_size = MIN_FRAME_SIZE

    def __init__(
        self,
        lag_skip: int = DEFAULT_LAG_SKIP,
        band_low: float = DEFAULT_BAND[0],
        band_high: float = DEFAULT_BAND[1],
    ):
        if lag_skip < 1:
            raise ValueError(f"lag_skip deve ser >= 1 (recebido {lag_skip})")
        super().__init__(BandFilter(band_low, band_high, inclusive=False))
        self.lag_skip = lag_skip

    def estimate(self, frame: np.ndarray, sample_rate: int) -> float:
        return autocorrelation_peak(frame, sample_rate, self.lag_skip)

    def reachable_max_hz(self, sample_rate: int) -> float:
        return sample_rate / self.lag_skip

    def __repr__(self) -> str:
        return f"AutocorrelationEstimator(lag_skip={self.lag_skip}, band={self.band.describe()})"
