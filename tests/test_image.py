"""Tests for the pixel buffer and image sink."""

import pytest
import numpy as np
from PIL import Image as PILImage

from raylume.image import RenderedImage, save_image


def gradient_image(width=4, height=3):
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    for j in range(height):
        for i in range(width):
            pixels[j, i] = (i * 10, j * 20, 255)
    return RenderedImage(width, height, pixels)


class TestRenderedImage:
    """Test RenderedImage buffer handling."""

    def test_blank_image(self):
        image = RenderedImage(5, 2)
        assert image.pixels.shape == (2, 5, 3)
        assert not image.pixels.any()

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            RenderedImage(4, 4, np.zeros((3, 4, 3), dtype=np.uint8))

    def test_set_row(self):
        image = RenderedImage(3, 2)
        image.set_row(1, np.full((3, 3), 7, dtype=np.uint8))
        assert not image.pixels[0].any()
        assert np.all(image.pixels[1] == 7)

    def test_packed_is_row_major(self):
        image = gradient_image()
        packed = image.packed()
        assert len(packed) == 12
        assert packed[0] == 0x0000FF
        # Second pixel of the first row
        assert packed[1] == (10 << 16) | 0xFF
        # First pixel of the second row
        assert packed[4] == (20 << 8) | 0xFF


class TestSaveImage:
    """Test encoding through Pillow."""

    def test_png_round_trip(self, tmp_path):
        image = gradient_image()
        path = tmp_path / "out.png"
        save_image(image, path)

        loaded = np.asarray(PILImage.open(path).convert('RGB'))
        assert np.array_equal(loaded, image.pixels)

    def test_ppm(self, tmp_path):
        image = gradient_image()
        path = tmp_path / "out.ppm"
        save_image(image, str(path))

        assert path.read_bytes().startswith(b"P6")
        loaded = np.asarray(PILImage.open(path))
        assert np.array_equal(loaded, image.pixels)

    def test_unknown_extension(self, tmp_path):
        with pytest.raises(ValueError):
            save_image(gradient_image(), tmp_path / "out.unknownformat")
