from __future__ import annotations

import abc
from enum import Enum

import numpy as np

from .band import BandFilter

# Returned when a frame carries no usable pitch.
NO_PITCH = 0.0


class EstimatorKind(str, Enum):
    SPECTRAL = "spectral"
    AUTOCORRELATION = "autocorrelation"


class PitchEstimator(abc.ABC):
    """One pitch-detection strategy working on a single self-contained frame.

    Implementations hold configuration only, so ``estimate`` is reentrant and
    the same input always yields the same output.
    """

    kind: EstimatorKind
    min_frame_size: int

    def __init__(self, band: BandFilter):
        self.band = band

    @abc.abstractmethod
    def estimate(self, frame: np.ndarray, sample_rate: int) -> float:
        """Return the frequency in Hz, or ``NO_PITCH``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(band={self.band.describe()})"
