"""Raster preprocessing applied before text recognition."""

import numpy as np
from PIL import Image

# > 1 pushes darks darker and lights lighter
CONTRAST = 1.5
INTERCEPT = 128 * (1 - CONTRAST)
# Pixels with alpha below this are treated as transparent background
ALPHA_THRESHOLD = 10


def preprocess_pixels(pixels: np.ndarray) -> None:
    """Grayscale and contrast-stretch an RGBA buffer in place.

    *pixels* must be a writable ``uint8`` array of shape (height, width, 4).
    Transparent pixels become opaque white; every other pixel gets
    ``clamp(L * 1.5 - 64)`` written to R, G and B, where L is the luma.
    Alpha is left unchanged.

    The transform is not idempotent: run it exactly once, on a copy of the
    raster dedicated to recognition.
    """
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"Expected an RGBA buffer, got shape {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected uint8 pixels, got {pixels.dtype}")

    rgb = pixels[..., :3].astype(np.float64)
    luma = 0.299 * rgb[..., 0] + 0.587 * rgb[..., 1] + 0.114 * rgb[..., 2]
    value = np.clip(np.rint(luma * CONTRAST + INTERCEPT), 0, 255).astype(np.uint8)

    transparent = pixels[..., 3] < ALPHA_THRESHOLD
    for channel in range(3):
        pixels[..., channel] = np.where(transparent, 255, value)
    pixels[..., 3] = np.where(transparent, 255, pixels[..., 3])


def preprocess_image(image: Image.Image) -> Image.Image:
    """Return a preprocessed RGBA copy of *image*; the input is untouched."""
    pixels = np.array(image.convert("RGBA"), dtype=np.uint8)
    preprocess_pixels(pixels)
    return Image.fromarray(pixels)
