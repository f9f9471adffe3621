#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from pitchdetect.dsp import sine_frame  # noqa: E402
from pitchdetect.sources import write_wav  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Gera um WAV mono 16 bits com um tom senoidal.")
    parser.add_argument("--out", required=True, help="Arquivo WAV de saida")
    parser.add_argument("--freq", type=float, default=440.0, help="Frequencia do tom (Hz)")
    parser.add_argument("--samplerate", type=int, default=8000, help="Sample rate")
    parser.add_argument("--seconds", type=float, default=3.0, help="Duracao (s)")
    parser.add_argument("--amplitude", type=float, default=10000.0, help="Amplitude de pico (int16)")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    n = int(args.seconds * args.samplerate)
    samples = sine_frame(args.freq, args.samplerate, n, amplitude=args.amplitude)
    write_wav(Path(args.out), samples, args.samplerate)
    print(f"Tom de {args.freq:g} Hz gravado em {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
