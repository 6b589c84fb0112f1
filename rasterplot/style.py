from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rasterplot.config import RGBA
from rasterplot.errors import PlotDataError


TOKEN_COLORS: dict[str, RGBA] = {
    "r": (255, 0, 0, 255),
    "g": (0, 255, 0, 255),
    "b": (0, 0, 255, 255),
    "y": (255, 255, 0, 255),
    "c": (0, 255, 255, 255),
    "p": (160, 32, 240, 255),
}


@dataclass(frozen=True)
class Style:
    color: RGBA
    # Parsed from a leading "-" in the token; carried but not used when drawing.
    connected: bool = False
    token: str | None = None

    @classmethod
    def parse(cls, token: str) -> "Style":
        text = token.strip()
        connected = text.startswith("-")
        key = text[1:] if connected else text
        if key not in TOKEN_COLORS:
            raise PlotDataError(f"unknown style token: {token!r}")
        return cls(color=TOKEN_COLORS[key], connected=connected, token=text)


PALETTE: tuple[Style, ...] = tuple(
    Style.parse(token) for token in ("r", "g", "b", "y", "c", "p", "-r", "-g", "-b", "-y", "-c", "-p")
)


def palette_style(index: int) -> Style:
    return PALETTE[index % len(PALETTE)]


def coerce_style(style: Any) -> Style:
    """Accept a ``Style``, a token such as ``"-g"``, or an RGB/RGBA tuple."""
    if isinstance(style, Style):
        return style
    if isinstance(style, str):
        return Style.parse(style)
    if isinstance(style, (tuple, list)) and len(style) in (3, 4):
        channels = [int(c) for c in style]
        if any(c < 0 or c > 255 for c in channels):
            raise PlotDataError(f"color channels must be in 0..255: {style!r}")
        if len(channels) == 3:
            channels.append(255)
        r, g, b, a = channels
        return Style(color=(r, g, b, a))
    raise PlotDataError(f"unsupported style: {style!r}")
