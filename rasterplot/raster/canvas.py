from __future__ import annotations

import numpy as np
from PIL import Image

from rasterplot.config import RGBA


class Canvas:
    """RGBA pixel buffer produced by a render.

    ``rgba`` has shape ``(height, width, 4)``. Row 0 is the bottom of the
    plot, which is also the first row a bottom-left-origin TGA stores.
    """

    def __init__(self, width: int, height: int, background: RGBA = (0, 0, 0, 0)) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        if width > 0xFFFF or height > 0xFFFF:
            raise ValueError("width and height must fit in 16 bits")
        self.background = background
        self.rgba = np.empty((height, width, 4), dtype=np.uint8)
        self.rgba[:, :] = np.asarray(background, dtype=np.uint8)

    @property
    def width(self) -> int:
        return int(self.rgba.shape[1])

    @property
    def height(self) -> int:
        return int(self.rgba.shape[0])

    def set_pixel(self, x: int, y: int, color: RGBA) -> bool:
        if x < 0 or x >= self.width or y < 0 or y >= self.height:
            return False
        self.rgba[y, x] = color
        return True

    def set_pixels(self, xs: np.ndarray, ys: np.ndarray, color: RGBA) -> int:
        inside = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)
        self.rgba[ys[inside], xs[inside]] = color
        return int(np.count_nonzero(inside))

    def pixel(self, x: int, y: int) -> RGBA:
        r, g, b, a = (int(v) for v in self.rgba[y, x])
        return (r, g, b, a)

    def mask_of(self, color: RGBA) -> np.ndarray:
        return np.all(self.rgba == np.asarray(color, dtype=np.uint8), axis=2)

    def painted_mask(self) -> np.ndarray:
        return ~self.mask_of(self.background)

    def to_image(self) -> Image.Image:
        # PIL images are top-down.
        return Image.fromarray(np.ascontiguousarray(self.rgba[::-1]))
