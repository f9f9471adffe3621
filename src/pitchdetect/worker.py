from __future__ import annotations

import logging
import threading
from typing import Optional

from .detector import PitchDetector
from .sources import FrameSource

logger = logging.getLogger(__name__)


class DetectionWorker:
    """Owns the background thread that pulls frames and runs the detector.

    ``start`` while running is a no-op. ``stop`` signals the loop and waits
    at most ``stop_timeout_s`` for the current iteration to finish.
    """

    def __init__(
        self,
        source: FrameSource,
        detector: PitchDetector,
        poll_interval_s: float = 0.1,
        stop_timeout_s: float = 0.5,
        name: str = "PitchWorker",
    ):
        self.source = source
        self.detector = detector
        self.poll_interval_s = poll_interval_s
        self.stop_timeout_s = stop_timeout_s
        self.name = name
        self.logger = logger.getChild(name)
        self.frames_processed = 0
        self.estimates_delivered = 0
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            self.logger.debug("Worker ja em execucao")
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name=self.name, daemon=True)
        self._thread.start()
        self.logger.debug("Worker iniciado")

    def stop(self) -> bool:
        """Return True if the thread finished within the timeout."""
        thread = self._thread
        if thread is None:
            return True
        self._stop.set()
        if thread is not threading.current_thread():
            thread.join(self.stop_timeout_s)
        finished = not thread.is_alive()
        if finished:
            self._thread = None
        else:
            self.logger.warning("Worker nao terminou em %.2fs", self.stop_timeout_s)
        return finished

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _loop(self) -> None:
        try:
            while not self._stop.is_set():
                frame = self.source.read()
                if frame is None:
                    self.logger.debug("Fim da fonte de audio")
                    break
                if len(frame) > 0:
                    self.frames_processed += 1
                    if self.detector.process(frame) is not None:
                        self.estimates_delivered += 1
                if self.poll_interval_s > 0:
                    self._stop.wait(self.poll_interval_s)
        except Exception:
            self.logger.exception("Erro no loop de deteccao")
        finally:
            self.source.close()
            self.logger.debug(
                "Worker encerrado (%d frames, %d estimativas)",
                self.frames_processed,
                self.estimates_delivered,
            )

    def __enter__(self) -> "DetectionWorker":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
