"""
Conversion of accumulated linear radiance into display-ready 8-bit colour.
"""

from __future__ import annotations
import math
from typing import Tuple

from .interval import Interval
from .vector3 import Colour

INTENSITY = Interval(0.000, 0.999)


def linear_to_gamma(linear_component: float) -> float:
    """Apply gamma 2 correction (square root); negative input maps to 0."""
    if linear_component > 0:
        return math.sqrt(linear_component)
    return 0.0


def write_colour(pixel_colour: Colour, samples_per_pixel: int) -> Tuple[int, int, int]:
    """Tone-map a summed sample colour to an 8-bit RGB triple.

    The sum is averaged over ``samples_per_pixel``, gamma corrected, clamped
    to [0, 0.999] and scaled to [0, 255].

    Args:
        pixel_colour: Sum of all sample colours for the pixel
        samples_per_pixel: Number of samples in the sum

    Returns:
        (r, g, b) integers in [0, 255]
    """
    scale = 1.0 / samples_per_pixel
    r = linear_to_gamma(pixel_colour.x * scale)
    g = linear_to_gamma(pixel_colour.y * scale)
    b = linear_to_gamma(pixel_colour.z * scale)

    return (
        int(256 * INTENSITY.clamp(r)),
        int(256 * INTENSITY.clamp(g)),
        int(256 * INTENSITY.clamp(b)),
    )


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack 8-bit channels into a 24-bit ``0xRRGGBB`` integer."""
    return (r << 16) | (g << 8) | b


def unpack_rgb(value: int) -> Tuple[int, int, int]:
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
