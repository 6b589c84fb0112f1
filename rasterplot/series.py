from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

from rasterplot.style import Style


@dataclass(frozen=True)
class SeriesData:
    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray
    source_name: str | None = None

    def finite_x(self) -> np.ndarray:
        return self.x[self.mask]

    def finite_y(self) -> np.ndarray:
        return self.y[self.mask]


@dataclass(frozen=True)
class SeriesSpec:
    data: SeriesData
    style: Style


@dataclass(frozen=True)
class FunctionEntry:
    func: Callable[[float], float]
    style: Style

    def evaluate(self, x: float) -> float:
        """Evaluate at ``x``; non-finite results come back as NaN."""
        value = float(self.func(x))
        if not math.isfinite(value):
            return math.nan
        return value

    def sample(self, xs: np.ndarray) -> np.ndarray:
        out = np.empty(xs.size, dtype=np.float64)
        for i, x in enumerate(xs.tolist()):
            out[i] = self.evaluate(x)
        return out
