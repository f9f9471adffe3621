from __future__ import annotations

import math
from functools import lru_cache
from typing import Optional

import numpy as np

INT16_SCALE = 32768.0

NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")


def normalize(frame) -> np.ndarray:
    return np.asarray(frame, dtype=np.float64) / INT16_SCALE


@lru_cache(maxsize=8)
def hann_window(n: int) -> np.ndarray:
    """Hann weights 0.5 * (1 - cos(2*pi*i / (n - 1))), cached per length."""
    if n < 1:
        raise ValueError(f"Tamanho de janela invalido: {n}")
    if n == 1:
        window = np.ones(1)
    else:
        i = np.arange(n, dtype=np.float64)
        window = 0.5 * (1.0 - np.cos(2.0 * math.pi * i / (n - 1)))
    window.setflags(write=False)
    return window


def apply_window(frame) -> np.ndarray:
    x = normalize(frame)
    if x.size <= 1:
        return x
    return x * hann_window(x.size)


def next_pow2(n: int) -> int:
    if n < 1:
        raise ValueError(f"Tamanho invalido: {n}")
    return 1 << (n - 1).bit_length()


def is_pow2(n: int) -> bool:
    return n >= 1 and n & (n - 1) == 0


def hz_to_midi(hz: float) -> Optional[float]:
    if hz <= 0:
        return None
    return 69.0 + 12.0 * math.log2(hz / 440.0)


def note_name(hz: float) -> Optional[str]:
    """Nearest note plus the offset in cents, e.g. ``A4 +2c``."""
    midi = hz_to_midi(hz)
    if midi is None:
        return None
    nearest = int(round(midi))
    cents = int(round((midi - nearest) * 100.0))
    octave = nearest // 12 - 1
    return f"{NOTE_NAMES[nearest % 12]}{octave} {cents:+d}c"


def sine_frame(freq: float, sample_rate: int, n: int, amplitude: float = 10000.0) -> np.ndarray:
    t = np.arange(n, dtype=np.float64) / sample_rate
    samples = amplitude * np.sin(2.0 * math.pi * freq * t)
    return np.clip(np.round(samples), -32768, 32767).astype(np.int16)
