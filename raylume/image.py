"""
Finished pixel buffers and the image sink that encodes them to disk.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union
import logging

import numpy as np
from PIL import Image as PILImage

from .colour import pack_rgb

logger = logging.getLogger(__name__)


class RenderedImage:
    """An 8-bit RGB image produced by the renderer.

    Pixels are stored row-major as a ``(height, width, 3)`` uint8 array;
    row 0 is the top of the image.
    """

    def __init__(self, width: int, height: int, pixels: np.ndarray = None):
        self.width = width
        self.height = height
        if pixels is None:
            pixels = np.zeros((height, width, 3), dtype=np.uint8)
        if pixels.shape != (height, width, 3):
            raise ValueError(
                f"pixel buffer shape {pixels.shape} does not match {width}x{height}"
            )
        self.pixels = pixels

    def set_row(self, row: int, values: np.ndarray) -> None:
        """Store one finished scanline."""
        self.pixels[row] = values

    def packed(self) -> list[int]:
        """Return the pixels as a flat row-major list of ``0xRRGGBB`` ints."""
        flat = self.pixels.reshape(-1, 3)
        return [pack_rgb(int(r), int(g), int(b)) for r, g, b in flat]

    def __repr__(self) -> str:
        return f"RenderedImage({self.width}x{self.height})"


def save_image(image: RenderedImage, filename: Union[str, Path]) -> None:
    """Save image to file.

    The format is chosen by Pillow from the file extension (.png, .ppm, ...).

    Args:
        image: The rendered image
        filename: Output filename
    """
    pil_image = PILImage.fromarray(image.pixels, 'RGB')
    pil_image.save(filename)
    logger.info("Saved %dx%d image to %s", image.width, image.height, filename)
