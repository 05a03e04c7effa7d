"""Text recognition and source rasterization."""

from .base import BaseRecognizer
from .ocr_extractor import TesseractRecognizer
from .pdf_extractor import PDFPageRasterizer
from .sources import SourceLoader, classify_source, load_image

__all__ = [
    "BaseRecognizer",
    "PDFPageRasterizer",
    "SourceLoader",
    "TesseractRecognizer",
    "classify_source",
    "load_image",
]
