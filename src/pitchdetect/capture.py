"""Microphone frame source built on sounddevice."""

from __future__ import annotations

import logging
import queue
from typing import List, Optional, Union

import numpy as np
import sounddevice as sd

logger = logging.getLogger(__name__)


class MicrophoneSource:
    """Serves the most recent ``frame_size`` samples captured from an input device.

    Audio older than one frame is discarded on each read, so a slow consumer
    sees live audio instead of a growing backlog.
    """

    def __init__(
        self,
        sample_rate: int,
        frame_size: int,
        device: Optional[Union[int, str]] = None,
        read_timeout_s: float = 1.0,
    ):
        self.sample_rate = sample_rate
        self.frame_size = frame_size
        self.read_timeout_s = read_timeout_s
        self._blocks: "queue.Queue[np.ndarray]" = queue.Queue()
        self._pending: List[np.ndarray] = []
        self._pending_size = 0
        self._status_count = 0
        self._reported_status = 0
        self._last_status = ""

        def audio_callback(indata: np.ndarray, frames: int, time_info, status) -> None:
            if status:
                self._status_count += 1
                self._last_status = str(status)
            self._blocks.put(indata[:, 0].copy())

        self.stream = sd.InputStream(
            channels=1,
            samplerate=sample_rate,
            dtype="int16",
            device=device,
            callback=audio_callback,
        )
        self.stream.start()
        logger.info("Captura iniciada (%d Hz, frames de %d amostras)", sample_rate, frame_size)

    def read(self) -> Optional[np.ndarray]:
        """Block until ``frame_size`` samples are buffered or the timeout expires.

        Returns an empty frame on timeout so the caller can check its stop
        flag, and None once the source is closed.
        """
        if self.stream is None:
            return None

        self._drain()
        while self._pending_size < self.frame_size:
            try:
                block = self._blocks.get(timeout=self.read_timeout_s)
            except queue.Empty:
                return np.zeros(0, dtype=np.int16)
            self._pending.append(block)
            self._pending_size += block.size
        self._report_status()

        joined = np.concatenate(self._pending)
        stale = joined.size - self.frame_size
        if stale:
            logger.debug("Descartando %d amostras atrasadas", stale)
        self._pending = []
        self._pending_size = 0
        return joined[stale:]

    def close(self) -> None:
        if self.stream is None:
            return
        stream = self.stream
        self.stream = None
        stream.stop()
        stream.close()
        self._report_status()
        logger.info("Captura encerrada")

    def _drain(self) -> None:
        while True:
            try:
                block = self._blocks.get_nowait()
            except queue.Empty:
                return
            self._pending.append(block)
            self._pending_size += block.size

    def _report_status(self) -> None:
        count = self._status_count
        if count > self._reported_status:
            logger.warning(
                "%d blocos com status de entrada (ultimo: %s)",
                count - self._reported_status,
                self._last_status,
            )
            self._reported_status = count
