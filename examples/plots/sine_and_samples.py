from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path

import numpy as np

from rasterplot import PlotModel


def build_model() -> PlotModel:
    model = PlotModel(640, 360)
    model.set_x_range(0.0, 4.0 * math.pi)

    x = np.linspace(0.0, 4.0 * math.pi, 25)
    model.add_series(x=x, y=0.6 * np.cos(x))
    model.add_function(math.sin)
    model.add_function(lambda v: 0.5 * math.sin(3.0 * v), style="-c")
    return model


def main() -> None:
    parser = argparse.ArgumentParser(prog="sine_and_samples")
    parser.add_argument("out", type=Path, help="output path (.tga, or any format Pillow writes)")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--raw", action="store_true", help="write an uncompressed TGA")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    path = build_model().write(args.out, args.width, args.height, rle=not args.raw)
    print(path)


if __name__ == "__main__":
    main()
