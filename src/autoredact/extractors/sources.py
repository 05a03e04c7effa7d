"""Loading and classification of submitted sources."""

import logging
from typing import Optional

import filetype
from PIL import Image, UnidentifiedImageError

from .pdf_extractor import PDFPageRasterizer
from ..errors import SourceLoadError
from ..models.entities import ImageSource, PageSource, SourceRef

logger = logging.getLogger(__name__)

IMAGE_MIME_TYPES = {"image/png", "image/jpeg", "image/webp", "image/bmp", "image/tiff", "image/gif"}
PDF_MIME_TYPE = "application/pdf"


def classify_source(path: str) -> Optional[str]:
    """Return ``"image"``, ``"pdf"`` or None by sniffing file content."""
    try:
        kind = filetype.guess(path)
    except OSError as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None
    if kind is None:
        return None
    if kind.mime == PDF_MIME_TYPE:
        return "pdf"
    if kind.mime in IMAGE_MIME_TYPES:
        return "image"
    return None


def load_image(path: str) -> Image.Image:
    """Decode an image file into an RGBA raster."""
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise SourceLoadError(f"Failed to load image {path}: {e}") from e


class SourceLoader:
    """Resolve a batch source reference into a color raster."""

    def __init__(self, rasterizer: Optional[PDFPageRasterizer] = None):
        self.rasterizer = rasterizer or PDFPageRasterizer()

    def load(self, source: SourceRef) -> Image.Image:
        if isinstance(source, PageSource):
            return self.rasterizer.rasterize(source.path, source.page_number)
        if isinstance(source, ImageSource):
            return load_image(source.path)
        raise SourceLoadError(f"Unsupported source: {source!r}")
