"""Unit tests for recognition preprocessing."""

import numpy as np
import pytest
from PIL import Image

from autoredact.preprocessing import preprocess_image, preprocess_pixels


class TestPreprocessPixels:
    def test_transparent_pixel_becomes_white(self):
        pixels = np.array([[[10, 20, 30, 0]]], dtype=np.uint8)
        preprocess_pixels(pixels)
        assert pixels[0, 0].tolist() == [255, 255, 255, 255]

    def test_alpha_threshold(self):
        pixels = np.array([[[0, 0, 0, 9], [0, 0, 0, 10]]], dtype=np.uint8)
        preprocess_pixels(pixels)
        assert pixels[0, 0].tolist() == [255, 255, 255, 255]
        assert pixels[0, 1].tolist() == [0, 0, 0, 10]

    def test_gray_contrast_stretch(self):
        pixels = np.array([[[100, 100, 100, 200]]], dtype=np.uint8)
        preprocess_pixels(pixels)
        assert pixels[0, 0].tolist() == [86, 86, 86, 200]

    def test_color_uses_luma(self):
        pixels = np.array([[[255, 0, 0, 255]]], dtype=np.uint8)
        preprocess_pixels(pixels)
        assert pixels[0, 0].tolist() == [50, 50, 50, 255]

    def test_clamped_to_byte_range(self):
        pixels = np.array([[[255, 255, 255, 255], [0, 0, 0, 255]]], dtype=np.uint8)
        preprocess_pixels(pixels)
        assert pixels[0, 0].tolist() == [255, 255, 255, 255]
        assert pixels[0, 1].tolist() == [0, 0, 0, 255]

    def test_not_idempotent(self):
        pixels = np.array([[[100, 100, 100, 255]]], dtype=np.uint8)
        preprocess_pixels(pixels)
        preprocess_pixels(pixels)
        assert pixels[0, 0, 0] == 65

    def test_rejects_rgb_buffer(self):
        with pytest.raises(ValueError):
            preprocess_pixels(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_rejects_float_buffer(self):
        with pytest.raises(ValueError):
            preprocess_pixels(np.zeros((2, 2, 4), dtype=np.float32))


class TestPreprocessImage:
    def test_returns_copy(self):
        image = Image.new("RGBA", (4, 3), (100, 100, 100, 255))
        result = preprocess_image(image)
        assert result is not image
        assert result.mode == "RGBA"
        assert result.size == (4, 3)
        assert result.getpixel((0, 0)) == (86, 86, 86, 255)
        assert image.getpixel((0, 0)) == (100, 100, 100, 255)

    def test_rgb_input_converted(self):
        result = preprocess_image(Image.new("RGB", (2, 2), (255, 255, 255)))
        assert result.getpixel((1, 1)) == (255, 255, 255, 255)
