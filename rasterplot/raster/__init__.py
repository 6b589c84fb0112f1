from .canvas import Canvas
from .draw_function import FunctionTrace, rasterize_function
from .draw_series import rasterize_series, walk_segment

__all__ = [
    "Canvas",
    "FunctionTrace",
    "rasterize_function",
    "rasterize_series",
    "walk_segment",
]
