from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from rasterplot.adapters import normalize_xy
from rasterplot.config import RenderConfig
from rasterplot.export import save_canvas
from rasterplot.raster.canvas import Canvas
from rasterplot.raster.draw_function import FunctionTrace, rasterize_function
from rasterplot.raster.draw_series import rasterize_series
from rasterplot.scales import AxisRange, Bound, PixelMapper, normalize_bound, resolve_ranges
from rasterplot.series import FunctionEntry, SeriesSpec
from rasterplot.style import Style, coerce_style, palette_style


LOGGER = logging.getLogger(__name__)


class PlotModel:
    """Accumulates series and functions and renders them onto a ``Canvas``.

    Not thread-safe: callers must not mutate a model while it renders.
    """

    def __init__(self, width: int | None = None, height: int | None = None, *, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()
        self.clear()
        if width is not None or height is not None:
            self.set_resolution(
                width if width is not None else self.config.default_width,
                height if height is not None else self.config.default_height,
            )

    def clear(self) -> "PlotModel":
        self.width = self.config.default_width
        self.height = self.config.default_height
        self._x_pin: tuple[Bound, Bound] = (None, None)
        self._y_pin: tuple[Bound, Bound] = (None, None)
        self._series: list[SeriesSpec] = []
        self._functions: list[FunctionEntry] = []
        self._style_index = 0
        self._last_ranges: tuple[AxisRange, AxisRange] | None = None
        self._last_traces: list[FunctionTrace] = []
        return self

    @property
    def series(self) -> tuple[SeriesSpec, ...]:
        return tuple(self._series)

    @property
    def functions(self) -> tuple[FunctionEntry, ...]:
        return tuple(self._functions)

    @property
    def x_range(self) -> tuple[Bound, Bound]:
        return self._x_pin

    @property
    def y_range(self) -> tuple[Bound, Bound]:
        return self._y_pin

    @property
    def last_ranges(self) -> tuple[AxisRange, AxisRange] | None:
        return self._last_ranges

    @property
    def last_traces(self) -> tuple[FunctionTrace, ...]:
        return tuple(self._last_traces)

    def set_x_range(self, low: float | None, high: float | None) -> "PlotModel":
        """Pin the x range. ``None``/NaN for a bound leaves it automatic."""
        self._x_pin = (normalize_bound(low), normalize_bound(high))
        return self

    def set_y_range(self, low: float | None, high: float | None) -> "PlotModel":
        self._y_pin = (normalize_bound(low), normalize_bound(high))
        return self

    def set_resolution(self, width: int, height: int) -> "PlotModel":
        self.width, self.height = _validate_resolution(width, height)
        return self

    def add_series(
        self,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        style: Style | str | tuple[int, ...] | None = None,
        name: str | None = None,
    ) -> "PlotModel":
        series_data = normalize_xy(y=y, x=x, data=data, source_name=name)
        self._series.append(SeriesSpec(data=series_data, style=self._next_style(style)))
        return self

    def add_function(
        self,
        func: Callable[[float], float],
        *,
        style: Style | str | tuple[int, ...] | None = None,
    ) -> "PlotModel":
        if not callable(func):
            raise TypeError("func must be callable")
        self._functions.append(FunctionEntry(func=func, style=self._next_style(style)))
        return self

    def _next_style(self, style: Any) -> Style:
        if style is not None:
            return coerce_style(style)
        out = palette_style(self._style_index)
        self._style_index += 1
        return out

    def render(self, width: int | None = None, height: int | None = None) -> Canvas:
        """Rasterize every series, then every function, onto a fresh canvas.

        ``width``/``height`` override the model resolution for this call only.
        Raises ``DegenerateRangeError`` when an axis cannot be resolved.
        """
        w, h = _validate_resolution(
            width if width is not None else self.width,
            height if height is not None else self.height,
        )
        x_range, y_range = resolve_ranges(
            self._series,
            self._functions,
            self._x_pin,
            self._y_pin,
            sampling_resolution=w,
            padding_ratio=self.config.padding_ratio,
        )
        LOGGER.debug(
            "render %dx%d: x=[%g, %g] y=[%g, %g] series=%d functions=%d",
            w,
            h,
            x_range.low,
            x_range.high,
            y_range.low,
            y_range.high,
            len(self._series),
            len(self._functions),
        )
        mapper = PixelMapper(x_range=x_range, y_range=y_range, width=w, height=h)
        canvas = Canvas(w, h, background=self.config.background)
        for spec in self._series:
            rasterize_series(spec, mapper, canvas)
        traces = [rasterize_function(entry, mapper, canvas, self.config) for entry in self._functions]

        self._last_ranges = (x_range, y_range)
        self._last_traces = traces
        return canvas

    def write(self, path: str | Path, width: int | None = None, height: int | None = None, *, rle: bool = True) -> Path:
        return save_canvas(self.render(width, height), path, rle=rle)


def _validate_resolution(width: int, height: int) -> tuple[int, int]:
    w = int(width)
    h = int(height)
    if w <= 0 or h <= 0:
        raise ValueError("width and height must be > 0")
    if w > 0xFFFF or h > 0xFFFF:
        raise ValueError("width and height must fit in 16 bits")
    return w, h
