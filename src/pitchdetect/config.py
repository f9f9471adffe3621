from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from . import autocorrelation, spectral
from .autocorrelation import AutocorrelationEstimator
from .estimator import EstimatorKind, PitchEstimator
from .spectral import SpectralEstimator

logger = logging.getLogger(__name__)


@dataclass
class DetectorConfig:
    sample_rate: int = 8000
    frame_size: int = 8192
    estimator_kind: EstimatorKind = EstimatorKind.SPECTRAL
    band_low: Optional[float] = None
    band_high: Optional[float] = None
    lag_skip: int = autocorrelation.DEFAULT_LAG_SKIP
    poll_interval_s: float = 0.1
    stop_timeout_s: float = 0.5

    def __post_init__(self) -> None:
        self.estimator_kind = EstimatorKind(self.estimator_kind)
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate deve ser positivo (recebido {self.sample_rate})")
        if self.frame_size <= 0:
            raise ValueError(f"frame_size deve ser positivo (recebido {self.frame_size})")
        if self.lag_skip < 1:
            raise ValueError(f"lag_skip deve ser >= 1 (recebido {self.lag_skip})")
        if self.poll_interval_s < 0 or self.stop_timeout_s < 0:
            raise ValueError("Intervalos nao podem ser negativos")
        low, high = self.resolved_band()
        if low >= high:
            raise ValueError(f"Banda invalida: {low} >= {high}")

    def resolved_band(self) -> tuple[float, float]:
        if self.estimator_kind is EstimatorKind.SPECTRAL:
            default_low, default_high = spectral.DEFAULT_BAND
        else:
            default_low, default_high = autocorrelation.DEFAULT_BAND
        low = default_low if self.band_low is None else float(self.band_low)
        high = default_high if self.band_high is None else float(self.band_high)
        return low, high

    def min_frame_size(self) -> int:
        if self.estimator_kind is EstimatorKind.SPECTRAL:
            return spectral.MIN_FRAME_SIZE
        return autocorrelation.MIN_FRAME_SIZE


def build_estimator(config: DetectorConfig) -> PitchEstimator:
    low, high = config.resolved_band()
    if config.frame_size < config.min_frame_size():
        logger.warning(
            "frame_size %d abaixo do minimo %d: nenhuma estimativa sera produzida",
            config.frame_size,
            config.min_frame_size(),
        )

    if config.estimator_kind is EstimatorKind.SPECTRAL:
        return SpectralEstimator(band_low=low, band_high=high)

    estimator = AutocorrelationEstimator(lag_skip=config.lag_skip, band_low=low, band_high=high)
    reachable = estimator.reachable_max_hz(config.sample_rate)
    if high > reachable:
        logger.warning(
            "Banda ate %.0f Hz, mas lag_skip=%d a %d Hz limita as estimativas a %.1f Hz",
            high,
            config.lag_skip,
            config.sample_rate,
            reachable,
        )
    return estimator
