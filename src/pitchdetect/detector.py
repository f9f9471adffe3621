from __future__ import annotations

import logging
from typing import Callable, Optional

import numpy as np

from .estimator import PitchEstimator

logger = logging.getLogger(__name__)

EstimateSink = Callable[[float], None]


class PitchDetector:
    """Runs one estimator on a frame and forwards admitted estimates to a sink."""

    def __init__(self, estimator: PitchEstimator, sample_rate: int, on_estimate: Optional[EstimateSink] = None):
        self.estimator = estimator
        self.sample_rate = sample_rate
        self.on_estimate = on_estimate

    def process(self, frame: np.ndarray) -> Optional[float]:
        if len(frame) < self.estimator.min_frame_size:
            return None

        hz = self.estimator.estimate(frame, self.sample_rate)
        if not self.estimator.band.admits(hz):
            if hz > 0.0:
                logger.debug("Estimativa %.2f Hz fora da banda %s", hz, self.estimator.band.describe())
            return None

        if self.on_estimate is not None:
            self.on_estimate(hz)
        return hz
