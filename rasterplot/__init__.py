from rasterplot.config import RenderConfig
from rasterplot.errors import DegenerateRangeError, MismatchedSeriesLengthError, PlotDataError
from rasterplot.export import encode_tga, save_canvas
from rasterplot.model import PlotModel
from rasterplot.raster import Canvas, FunctionTrace
from rasterplot.scales import AxisRange, PixelMapper, resolve_ranges, to_pixel
from rasterplot.style import PALETTE, Style

__all__ = [
    "AxisRange",
    "Canvas",
    "DegenerateRangeError",
    "FunctionTrace",
    "MismatchedSeriesLengthError",
    "PALETTE",
    "PixelMapper",
    "PlotDataError",
    "PlotModel",
    "RenderConfig",
    "Style",
    "encode_tga",
    "resolve_ranges",
    "save_canvas",
    "to_pixel",
]
