"""Frame sources feeding the detection worker."""

from __future__ import annotations

import wave
from pathlib import Path
from typing import Optional, Protocol

import numpy as np


class FrameSource(Protocol):
    sample_rate: int

    def read(self) -> Optional[np.ndarray]:
        """Next frame of int16 samples, or None once the stream is over."""

    def close(self) -> None:
        ...


class ArraySource:
    def __init__(self, samples, frame_size: int, sample_rate: int):
        if frame_size <= 0:
            raise ValueError(f"frame_size deve ser positivo (recebido {frame_size})")
        self.samples = np.asarray(samples, dtype=np.int16)
        self.frame_size = frame_size
        self.sample_rate = sample_rate
        self.position = 0

    def read(self) -> Optional[np.ndarray]:
        if self.position >= self.samples.size:
            return None
        frame = self.samples[self.position : self.position + self.frame_size]
        self.position += self.frame_size
        return frame

    def close(self) -> None:
        self.position = self.samples.size


class WavFileSource:
    """Consecutive frames from a mono 16-bit WAV file."""

    def __init__(self, path: Path, frame_size: int):
        if frame_size <= 0:
            raise ValueError(f"frame_size deve ser positivo (recebido {frame_size})")
        self.path = Path(path)
        self.frame_size = frame_size
        self._handle = wave.open(str(self.path), "rb")
        try:
            if self._handle.getsampwidth() != 2:
                raise ValueError(f"{self.path}: apenas WAV de 16 bits e suportado")
            if self._handle.getnchannels() != 1:
                raise ValueError(f"{self.path}: apenas WAV mono e suportado")
        except ValueError:
            self._handle.close()
            raise
        self.sample_rate = self._handle.getframerate()

    def read(self) -> Optional[np.ndarray]:
        if self._handle is None:
            return None
        raw = self._handle.readframes(self.frame_size)
        if not raw:
            return None
        return np.frombuffer(raw, dtype="<i2").astype(np.int16)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "WavFileSource":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def write_wav(path: Path, samples, sample_rate: int) -> None:
    data = np.asarray(samples, dtype=np.int16)
    with wave.open(str(path), "wb") as handle:
        handle.setnchannels(1)
        handle.setsampwidth(2)
        handle.setframerate(sample_rate)
        handle.writeframes(data.astype("<i2").tobytes())
