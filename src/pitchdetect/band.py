from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BandFilter:
    """Admissible frequency range for estimates coming out of one estimator."""

    low: float
    high: float
    inclusive: bool = True

    def __post_init__(self) -> None:
        if self.low >= self.high:
            raise ValueError(f"Banda invalida: {self.low} >= {self.high}")

    def admits(self, hz: float) -> bool:
        if hz <= 0.0:
            return False
        if self.inclusive:
            return self.low <= hz <= self.high
        return self.low < hz < self.high

    def describe(self) -> str:
        left, right = ("[", "]") if self.inclusive else ("(", ")")
        return f"{left}{self.low:g}, {self.high:g}{right} Hz"
