from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from rasterplot.config import RenderConfig
from rasterplot.raster.canvas import Canvas
from rasterplot.scales import PixelMapper
from rasterplot.series import FunctionEntry


LOGGER = logging.getLogger(__name__)


@dataclass
class FunctionTrace:
    samples: int = 0
    evaluations: int = 0
    exhausted_halvings: int = 0
    truncated: bool = False
    # Plotted pixels in walk order; gaps from non-finite values start a new run.
    points: list[tuple[int, int]] = field(default_factory=list)
    runs: list[tuple[int, int]] = field(default_factory=list)


def rasterize_function(
    entry: FunctionEntry,
    mapper: PixelMapper,
    canvas: Canvas,
    config: RenderConfig | None = None,
) -> FunctionTrace:
    """Adaptively sample ``entry`` across the x range and plot each accepted sample.

    Each step starts at one pixel column and is halved until the pixel row
    moves by less than one row from the previous accepted sample, so the
    plotted trace has no vertical gaps. Halving is capped per sample and the
    total sample count is capped per function.
    """
    cfg = config or RenderConfig()
    x_low = mapper.x_range.low
    x_high = mapper.x_range.high
    base_step = mapper.x_step
    max_samples = cfg.max_samples_per_column * mapper.width
    trace = FunctionTrace()
    run_start = 0

    def clamped_row(y: float) -> float:
        return min(float(mapper.height), max(-1.0, mapper.row_of(y)))

    def accept(x: float, y: float) -> None:
        nonlocal run_start
        trace.samples += 1
        if math.isnan(y):
            if len(trace.points) > run_start:
                trace.runs.append((run_start, len(trace.points)))
            run_start = len(trace.points)
            return
        px, py = mapper.to_pixel(x, y)
        canvas.set_pixel(px, py, entry.style.color)
        trace.points.append((px, py))

    x = x_low
    y = entry.evaluate(x)
    trace.evaluations += 1
    accept(x, y)
    prev_row = None if math.isnan(y) else clamped_row(y)

    while x < x_high:
        if trace.samples >= max_samples:
            trace.truncated = True
            LOGGER.warning(
                "function trace truncated after %d samples at x=%g (range %g..%g)",
                trace.samples,
                x,
                x_low,
                x_high,
            )
            break

        step = base_step
        halvings = 0
        while True:
            candidate = min(x + step, x_high)
            y = entry.evaluate(candidate)
            trace.evaluations += 1
            if math.isnan(y) or prev_row is None:
                break
            if abs(clamped_row(y) - prev_row) < 1.0:
                break
            # A half step that no longer moves x counts as an exhausted budget.
            if halvings >= cfg.max_halvings or x + step / 2 <= x:
                trace.exhausted_halvings += 1
                break
            step /= 2
            halvings += 1

        if candidate <= x:
            # Even the one-column step is below float resolution around x.
            trace.truncated = True
            LOGGER.warning("function trace stalled at x=%g; step underflow", x)
            break
        x = candidate
        accept(x, y)
        prev_row = None if math.isnan(y) else clamped_row(y)

    if len(trace.points) > run_start:
        trace.runs.append((run_start, len(trace.points)))
    if trace.exhausted_halvings:
        LOGGER.warning(
            "function sampling hit the halving limit (%d) at %d samples; steep or discontinuous region accepted as-is",
            cfg.max_halvings,
            trace.exhausted_halvings,
        )
    return trace
