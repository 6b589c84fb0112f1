from __future__ import annotations

import math

import numpy as np

from rasterplot.raster.canvas import Canvas
from rasterplot.scales import PixelMapper
from rasterplot.series import SeriesSpec


def rasterize_series(spec: SeriesSpec, mapper: PixelMapper, canvas: Canvas) -> int:
    """Walk each consecutive pair of finite points and return the pixel write count.

    A finite point with no finite neighbour is plotted as a single pixel.
    """
    x = spec.data.x
    y = spec.data.y
    mask = spec.data.mask
    color = spec.style.color

    writes = 0
    for i in range(x.size):
        if not mask[i]:
            continue
        linked_before = i > 0 and mask[i - 1]
        linked_after = i + 1 < x.size and mask[i + 1]
        if not (linked_before or linked_after):
            # Isolated finite point between gaps.
            px, py = mapper.to_pixel(float(x[i]), float(y[i]))
            writes += int(canvas.set_pixel(px, py, color))
        if not linked_after:
            continue
        x0, y0 = mapper.to_fractional(float(x[i]), float(y[i]))
        x1, y1 = mapper.to_fractional(float(x[i + 1]), float(y[i + 1]))
        writes += walk_segment(canvas, mapper, x0, y0, x1, y1, color)
    return writes


def walk_segment(
    canvas: Canvas,
    mapper: PixelMapper,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    color: tuple[int, int, int, int],
) -> int:
    """DDA walk in fractional pixel space.

    The dominant axis advances by ``major / (major + 1)`` of a pixel per
    step, so the walk has ``ceil(major + 1)`` steps and a zero-length
    segment yields a single pixel.
    """
    limit = 2 * (mapper.width + mapper.height)
    if max(abs(x1 - x0), abs(y1 - y0)) > limit:
        x0, y0, x1, y1 = _clip_to_box(x0, y0, x1, y1, mapper.width, mapper.height)

    dx = x1 - x0
    dy = y1 - y0
    major = max(abs(dx), abs(dy))
    steps = int(math.ceil(major + 1.0))
    t = np.minimum(1.0, np.arange(steps + 1, dtype=np.float64) / (major + 1.0))
    px = np.clip(np.rint(x0 + dx * t), 0, mapper.width - 1).astype(np.int64)
    py = np.clip(np.rint(y0 + dy * t), 0, mapper.height - 1).astype(np.int64)
    return canvas.set_pixels(px, py, color)


def _clip_to_box(x0: float, y0: float, x1: float, y1: float, width: int, height: int) -> tuple[float, float, float, float]:
    # Liang-Barsky against [-1, width] x [-1, height]; a miss collapses to the
    # clamped endpoints so the segment still lands on the nearest edge.
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 + 1.0), (dx, width - x0), (-dy, y0 + 1.0), (dy, height - y0)):
        if p == 0:
            if q < 0:
                t0, t1 = 1.0, 0.0
                break
            continue
        r = q / p
        if p < 0:
            t0 = max(t0, r)
        else:
            t1 = min(t1, r)
    if t0 > t1:
        return (
            min(float(width), max(-1.0, x0)),
            min(float(height), max(-1.0, y0)),
            min(float(width), max(-1.0, x1)),
            min(float(height), max(-1.0, y1)),
        )
    return x0 + dx * t0, y0 + dy * t0, x0 + dx * t1, y0 + dy * t1
