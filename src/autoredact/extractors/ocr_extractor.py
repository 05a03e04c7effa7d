"""Text recognition with Tesseract via pytesseract."""

import logging
from typing import Dict, List, Optional, Tuple

import pytesseract
from PIL import Image

from .base import BaseRecognizer, ProgressCallback
from ..errors import RecognitionError
from ..models.entities import (
    BoundingBox,
    OcrBlock,
    OcrLine,
    OcrParagraph,
    OcrWord,
    RecognitionResult,
)

logger = logging.getLogger(__name__)

# Tesseract layout level for individual words
_WORD_LEVEL = 5


def build_word_tree(data: Dict[str, list]) -> Tuple[OcrBlock, ...]:
    """Convert ``image_to_data`` column output into a strict word tree.

    Rows are grouped by (block, paragraph, line) in the order Tesseract
    reports them. Words with blank text are dropped.
    """
    layout: Dict[int, Dict[int, Dict[int, List[OcrWord]]]] = {}
    for i, level in enumerate(data.get("level", [])):
        if int(level) != _WORD_LEVEL:
            continue
        text = str(data["text"][i] or "").strip()
        if not text:
            continue
        left, top = int(data["left"][i]), int(data["top"][i])
        word = OcrWord(
            text=text,
            bbox=BoundingBox(
                x0=left,
                y0=top,
                x1=left + int(data["width"][i]),
                y1=top + int(data["height"][i]),
            ),
        )
        block = layout.setdefault(int(data["block_num"][i]), {})
        paragraph = block.setdefault(int(data["par_num"][i]), {})
        paragraph.setdefault(int(data["line_num"][i]), []).append(word)

    return tuple(
        OcrBlock(
            paragraphs=tuple(
                OcrParagraph(
                    lines=tuple(OcrLine(words=tuple(words)) for words in lines.values())
                )
                for lines in paragraphs.values()
            )
        )
        for paragraphs in layout.values()
    )


def flatten_text(blocks: Tuple[OcrBlock, ...]) -> str:
    """Rebuild flat text: words joined by spaces, lines by newlines,
    blocks separated by a blank line."""
    block_texts = []
    for block in blocks:
        lines = [
            " ".join(word.text for word in line.words)
            for paragraph in block.paragraphs
            for line in paragraph.lines
        ]
        block_texts.append("\n".join(lines))
    return "\n\n".join(block_texts)


class TesseractRecognizer(BaseRecognizer):
    """Run Tesseract once per raster and return text plus word boxes."""

    def __init__(
        self,
        lang: str = "eng",
        tesseract_cmd: Optional[str] = None,
        config: str = "",
    ):
        self.lang = lang
        self.config = config
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def recognize(
        self,
        image: Image.Image,
        on_progress: Optional[ProgressCallback] = None,
    ) -> RecognitionResult:
        if on_progress:
            on_progress(0.0)
        try:
            data = pytesseract.image_to_data(
                image,
                lang=self.lang,
                config=self.config,
                output_type=pytesseract.Output.DICT,
            )
        except Exception as e:
            raise RecognitionError(f"Tesseract failed: {e}") from e

        blocks = build_word_tree(data)
        text = flatten_text(blocks)
        logger.info("OCR recognized %d characters", len(text))
        if on_progress:
            on_progress(1.0)
        return RecognitionResult(text=text, blocks=blocks)
