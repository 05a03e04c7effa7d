"""Factory for constructing a fully wired redaction pipeline."""

from typing import Optional

from .batch import BatchOrchestrator, ItemObserver, ProgressObserver
from .config import Settings, get_settings
from .detectors.pattern_detector import PatternDetector
from .extractors.base import BaseRecognizer
from .extractors.ocr_extractor import TesseractRecognizer
from .extractors.pdf_extractor import PDFPageRasterizer
from .extractors.sources import SourceLoader
from .pipeline import RedactionPipeline
from .redactors.raster_redactor import RasterRedactor


def build_rasterizer(settings: Optional[Settings] = None) -> PDFPageRasterizer:
    settings = settings or get_settings()
    return PDFPageRasterizer(
        scale=settings.pdf_render_scale,
        max_size_bytes=settings.pdf_max_size_bytes,
        max_pages=settings.pdf_max_pages,
    )


def build_pipeline(
    settings: Optional[Settings] = None,
    recognizer: Optional[BaseRecognizer] = None,
) -> RedactionPipeline:
    """Build a RedactionPipeline from settings.

    A Tesseract recognizer is used unless *recognizer* is given.
    """
    settings = settings or get_settings()
    if recognizer is None:
        recognizer = TesseractRecognizer(
            lang=settings.ocr_language,
            tesseract_cmd=settings.tesseract_cmd,
        )

    return RedactionPipeline(
        loader=SourceLoader(build_rasterizer(settings)),
        recognizer=recognizer,
        detector=PatternDetector(),
        redactor=RasterRedactor(
            fill_color=tuple(settings.fill_color),
            padding=settings.redaction_padding,
        ),
        upscale=settings.ocr_upscale,
    )


def build_batch(
    settings: Optional[Settings] = None,
    recognizer: Optional[BaseRecognizer] = None,
    on_item: Optional[ItemObserver] = None,
    on_progress: Optional[ProgressObserver] = None,
) -> BatchOrchestrator:
    """Build a BatchOrchestrator around a pipeline built from settings."""
    settings = settings or get_settings()
    return BatchOrchestrator(
        pipeline=build_pipeline(settings, recognizer),
        rasterizer=build_rasterizer(settings),
        on_item=on_item,
        on_progress=on_progress,
    )
