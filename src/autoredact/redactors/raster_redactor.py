"""Opaque box redaction on raster images using Pillow."""

import logging
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw

from .base import BaseRedactor
from ..models.entities import DetectedItem

logger = logging.getLogger(__name__)


class RasterRedactor(BaseRedactor):
    """Draw solid boxes over detected words, then resample once.

    Boxes are grown by ``padding`` pixels on every side. Draw order does not
    matter because the fill is opaque.
    """

    def __init__(
        self,
        fill_color: tuple = (0, 0, 0),
        padding: int = 2,
        resample: int = Image.Resampling.LANCZOS,
    ):
        self.fill_color = fill_color
        self.padding = padding
        self.resample = resample

    def apply_redactions(
        self,
        raster: Image.Image,
        items: List[DetectedItem],
        output_size: Optional[Tuple[int, int]] = None,
    ) -> Image.Image:
        canvas = raster.convert("RGBA") if raster.mode != "RGBA" else raster.copy()
        draw = ImageDraw.Draw(canvas)
        fill = tuple(self.fill_color) + (255,) if len(self.fill_color) == 3 else tuple(self.fill_color)

        for item in items:
            box = item.bbox.expanded(self.padding)
            if box.x1 <= box.x0 or box.y1 <= box.y0:
                continue
            # Pillow rectangles include their end coordinate
            draw.rectangle([box.x0, box.y0, box.x1 - 1, box.y1 - 1], fill=fill)

        logger.debug("Drew %d redaction boxes", len(items))

        if output_size is None or tuple(output_size) == canvas.size:
            return canvas
        return canvas.resize(tuple(output_size), self.resample)
