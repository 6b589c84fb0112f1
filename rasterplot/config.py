from __future__ import annotations

from dataclasses import dataclass


RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class RenderConfig:
    default_width: int = 1024
    default_height: int = 768
    padding_ratio: float = 1.05
    background: RGBA = (0, 0, 0, 0)
    # Adaptive function sampling guards.
    max_halvings: int = 24
    max_samples_per_column: int = 64

    def __post_init__(self) -> None:
        if self.default_width <= 0 or self.default_height <= 0:
            raise ValueError("default_width/default_height must be > 0")
        if self.padding_ratio < 1.0:
            raise ValueError("padding_ratio must be >= 1")
        if len(self.background) != 4 or any(not 0 <= int(c) <= 255 for c in self.background):
            raise ValueError("background must be an RGBA tuple of 0..255 ints")
        if self.max_halvings < 0:
            raise ValueError("max_halvings must be >= 0")
        if self.max_samples_per_column <= 0:
            raise ValueError("max_samples_per_column must be > 0")
