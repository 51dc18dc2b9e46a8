from __future__ import annotations
import io
from dataclasses import dataclass
from typing import Protocol, Tuple

import numpy as np
from PIL import Image

from simulate import Grid

RGB = Tuple[int, int, int]

BLACK: RGB = (0, 0, 0)
WHITE: RGB = (255, 255, 255)


class Encoder(Protocol):
    content_type: str
    extension: str

    def encode(self, grid: Grid) -> bytes:
        ...


@dataclass(frozen=True)
class PngEncoder:
    """
    Palette PNG, one pixel per cell: live cells in `foreground`,
    dead cells in `background`.
    """
    foreground: RGB = BLACK
    background: RGB = WHITE
    content_type: str = "image/png"
    extension: str = "png"

    def to_image(self, grid: Grid) -> Image.Image:
        # palette index 0 = background, 1 = foreground
        pixels = grid.to_array().astype(np.uint8)
        img = Image.frombytes("P", (grid.width, grid.height), pixels.tobytes())
        img.putpalette(list(self.background) + list(self.foreground))
        return img

    def encode(self, grid: Grid) -> bytes:
        buf = io.BytesIO()
        self.to_image(grid).save(buf, format="PNG", optimize=True)
        return buf.getvalue()
