from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

from .config import DetectorConfig, build_estimator
from .detector import PitchDetector
from .dsp import note_name
from .estimator import EstimatorKind
from .sources import FrameSource, WavFileSource
from .worker import DetectionWorker


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Detector de frequencia fundamental em tempo real")
    parser.add_argument("--wav", type=Path, help="Analisa um arquivo WAV mono 16 bits em vez do microfone")
    parser.add_argument("--device", help="Dispositivo de entrada de audio (indice ou nome)")
    parser.add_argument(
        "--estimator",
        choices=[kind.value for kind in EstimatorKind],
        default=EstimatorKind.SPECTRAL.value,
        help="Estrategia de estimativa",
    )
    parser.add_argument("--samplerate", type=int, default=8000, help="Sample rate (ignorado com --wav)")
    parser.add_argument("--framesize", type=int, default=8192, help="Tamanho do frame em amostras")
    parser.add_argument("--band-low", type=float, help="Limite inferior da banda admissivel (Hz)")
    parser.add_argument("--band-high", type=float, help="Limite superior da banda admissivel (Hz)")
    parser.add_argument("--lag-skip", type=int, default=30, help="Menor lag considerado (autocorrelacao)")
    parser.add_argument("--interval", type=float, default=0.1, help="Intervalo entre frames (s)")
    parser.add_argument("--duration", type=float, help="Duracao da captura ao vivo (s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log detalhado")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    source: FrameSource
    if args.wav is not None:
        try:
            source = WavFileSource(args.wav, args.framesize)
        except (OSError, ValueError, EOFError) as exc:
            parser.error(str(exc))
        sample_rate = source.sample_rate
    else:
        sample_rate = args.samplerate

    try:
        config = DetectorConfig(
            sample_rate=sample_rate,
            frame_size=args.framesize,
            estimator_kind=EstimatorKind(args.estimator),
            band_low=args.band_low,
            band_high=args.band_high,
            lag_skip=args.lag_skip,
            poll_interval_s=0.0 if args.wav is not None else args.interval,
        )
    except ValueError as exc:
        if args.wav is not None:
            source.close()
        parser.error(str(exc))

    estimator = build_estimator(config)
    logging.getLogger(__name__).info("Usando %r a %d Hz", estimator, config.sample_rate)

    readings: List[float] = []

    def on_estimate(hz: float) -> None:
        readings.append(hz)
        print(f"{hz:8.1f} Hz  {note_name(hz)}", flush=True)

    detector = PitchDetector(estimator, config.sample_rate, on_estimate)

    if args.wav is None:
        from .capture import MicrophoneSource

        device = int(args.device) if args.device and args.device.isdigit() else args.device
        source = MicrophoneSource(config.sample_rate, config.frame_size, device=device)

    worker = DetectionWorker(
        source,
        detector,
        poll_interval_s=config.poll_interval_s,
        stop_timeout_s=config.stop_timeout_s,
    )

    worker.start()
    try:
        if args.wav is not None:
            worker.join()
        else:
            deadline = None if args.duration is None else time.monotonic() + args.duration
            while worker.running and (deadline is None or time.monotonic() < deadline):
                time.sleep(0.1)
    except KeyboardInterrupt:
        pass
    finally:
        worker.stop()

    _print_summary(readings)
    return 0


def _print_summary(readings: List[float]) -> None:
    print("")
    print("Resumo:")
    print(f"  Estimativas: {len(readings)}")
    if readings:
        ordered = sorted(readings)
        median = ordered[len(ordered) // 2]
        print(f"  Mediana:     {median:.1f} Hz  {note_name(median)}")


if __name__ == "__main__":
    raise SystemExit(main())
