from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from rasterplot.errors import DegenerateRangeError
from rasterplot.series import FunctionEntry, SeriesSpec


Bound = float | None


@dataclass(frozen=True)
class AxisRange:
    low: float
    high: float

    @property
    def span(self) -> float:
        return self.high - self.low


def normalize_bound(value: float | None) -> Bound:
    if value is None:
        return None
    value = float(value)
    if math.isnan(value):
        return None
    return value


def resolve_axis(
    axis: str,
    pinned: tuple[Bound, Bound],
    data_min: float | None,
    data_max: float | None,
    padding_ratio: float = 1.05,
) -> AxisRange:
    """Fill unpinned bounds from data and pad the auto-computed end(s).

    The low end is taken first, then the high end, and the padding is
    computed from that provisional span. When only one end is automatic it
    absorbs the whole padding delta; otherwise each end gets half.
    """
    low, high = pinned
    auto_low = low is None
    auto_high = high is None
    if auto_low:
        low = data_min
    if auto_high:
        high = data_max
    if low is None or high is None:
        raise DegenerateRangeError(f"cannot infer {axis} range: no finite data and no pinned bounds")

    if auto_low or auto_high:
        if low == high:
            widen = max(1.0, abs(low) * (padding_ratio - 1.0))
            if auto_low:
                low -= widen
            if auto_high:
                high += widen
        span = high - low
        pad = span * padding_ratio - span
        if auto_low and auto_high:
            low -= pad / 2
            high += pad / 2
        elif auto_low:
            low -= pad
        else:
            high += pad

    if not low < high:
        raise DegenerateRangeError(f"{axis} range is degenerate: low={low!r} high={high!r}")
    return AxisRange(low=float(low), high=float(high))


def resolve_ranges(
    series: Sequence[SeriesSpec],
    functions: Sequence[FunctionEntry],
    x_pin: tuple[Bound, Bound],
    y_pin: tuple[Bound, Bound],
    sampling_resolution: int,
    padding_ratio: float = 1.05,
) -> tuple[AxisRange, AxisRange]:
    if sampling_resolution <= 0:
        raise ValueError("sampling_resolution must be > 0")

    x_values = [spec.data.finite_x() for spec in series]
    x_min, x_max = _extrema(x_values)
    x_range = resolve_axis("x", x_pin, x_min, x_max, padding_ratio)

    if y_pin[0] is not None and y_pin[1] is not None:
        return x_range, resolve_axis("y", y_pin, None, None, padding_ratio)

    y_values = [spec.data.finite_y() for spec in series]
    if functions:
        step = x_range.span / sampling_resolution
        xs = x_range.low + np.arange(sampling_resolution, dtype=np.float64) * step
        for entry in functions:
            samples = entry.sample(xs)
            y_values.append(samples[np.isfinite(samples)])
    y_min, y_max = _extrema(y_values)
    return x_range, resolve_axis("y", y_pin, y_min, y_max, padding_ratio)


def _extrema(chunks: list[np.ndarray]) -> tuple[float | None, float | None]:
    chunks = [c for c in chunks if c.size]
    if not chunks:
        return None, None
    values = np.concatenate(chunks)
    return float(np.min(values)), float(np.max(values))


@dataclass(frozen=True)
class PixelMapper:
    x_range: AxisRange
    y_range: AxisRange
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        if not self.x_range.span > 0 or not self.y_range.span > 0:
            raise DegenerateRangeError("cannot map onto a zero-span range")

    @property
    def x_step(self) -> float:
        return self.x_range.span / self.width

    @property
    def y_step(self) -> float:
        return self.y_range.span / self.height

    def to_fractional(self, x: float, y: float) -> tuple[float, float]:
        return (x - self.x_range.low) / self.x_step, (y - self.y_range.low) / self.y_step

    def row_of(self, y: float) -> float:
        return (y - self.y_range.low) / self.y_step

    def clamp(self, px: float, py: float) -> tuple[int, int]:
        xi = int(min(self.width - 1, max(0.0, float(np.rint(px)))))
        yi = int(min(self.height - 1, max(0.0, float(np.rint(py)))))
        return xi, yi

    def to_pixel(self, x: float, y: float) -> tuple[int, int]:
        return self.clamp(*self.to_fractional(x, y))

    def map_arrays(self, x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        px = np.clip(np.rint((x - self.x_range.low) / self.x_step), 0, self.width - 1)
        py = np.clip(np.rint((y - self.y_range.low) / self.y_step), 0, self.height - 1)
        return px.astype(np.int64), py.astype(np.int64)


def to_pixel(x: float, y: float, x_range: AxisRange, y_range: AxisRange, width: int, height: int) -> tuple[int, int]:
    return PixelMapper(x_range=x_range, y_range=y_range, width=width, height=height).to_pixel(x, y)
