"""Shared pytest fixtures and helpers.

All tests run locally: recognition is faked, rasters are small Pillow
images and PDFs are generated with PyMuPDF.
"""

from typing import List, Optional, Sequence, Union

import pytest
from PIL import Image

from autoredact.detectors.pattern_detector import PatternDetector
from autoredact.extractors.base import BaseRecognizer
from autoredact.extractors.sources import SourceLoader
from autoredact.models.entities import (
    BoundingBox,
    OcrBlock,
    OcrLine,
    OcrParagraph,
    OcrWord,
    RecognitionResult,
)
from autoredact.pipeline import RedactionPipeline
from autoredact.redactors.raster_redactor import RasterRedactor


def word(text: str, x0: float = 0, y0: float = 0, x1: float = 10, y1: float = 10) -> OcrWord:
    return OcrWord(text=text, bbox=BoundingBox(x0, y0, x1, y1))


def recognition(text: str, *lines: Sequence[OcrWord]) -> RecognitionResult:
    """A single-block, single-paragraph result with the given lines."""
    if not lines:
        return RecognitionResult(text=text)
    paragraph = OcrParagraph(lines=tuple(OcrLine(words=tuple(ws)) for ws in lines))
    return RecognitionResult(text=text, blocks=(OcrBlock(paragraphs=(paragraph,)),))


class FakeRecognizer(BaseRecognizer):
    """Returns scripted results in call order; exceptions are raised."""

    def __init__(self, *results: Union[RecognitionResult, Exception]):
        self.results = list(results)
        self.images: List[Image.Image] = []

    def recognize(self, image, on_progress=None) -> RecognitionResult:
        self.images.append(image)
        result = self.results[min(len(self.images), len(self.results)) - 1]
        if isinstance(result, Exception):
            raise result
        if on_progress:
            on_progress(1.0)
        return result


def make_pipeline(recognizer: BaseRecognizer, loader: Optional[SourceLoader] = None) -> RedactionPipeline:
    return RedactionPipeline(
        loader=loader or SourceLoader(),
        recognizer=recognizer,
        detector=PatternDetector(),
        redactor=RasterRedactor(),
        upscale=2,
    )


EMAIL_RESULT = recognition(
    "Contact: a@b.com",
    [word("Contact:", 0, 0, 16, 10), word("a@b.com", 20, 10, 60, 20)],
)


@pytest.fixture
def png_factory(tmp_path):
    """Write a solid-colour PNG and return its path."""

    def _make(name: str = "image.png", size=(50, 20), color=(255, 255, 255, 255)) -> str:
        path = tmp_path / name
        Image.new("RGBA", size, color).save(path, format="PNG")
        return str(path)

    return _make


@pytest.fixture
def pdf_factory(tmp_path):
    """Write a PDF with *pages* pages of text and return its path."""
    import fitz  # PyMuPDF

    def _make(name: str = "document.pdf", pages: int = 2) -> str:
        path = tmp_path / name
        doc = fitz.open()
        for n in range(pages):
            page = doc.new_page()
            page.insert_text((72, 72), f"Page {n + 1} contact a@b.com")
        doc.save(str(path))
        doc.close()
        return str(path)

    return _make
