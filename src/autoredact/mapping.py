"""Map character-offset spans onto OCR word bounding boxes."""

import logging
from typing import Iterable, List, Optional, Sequence

from .models.entities import (
    BoundingBox,
    DetectedItem,
    MatchSpan,
    OcrWord,
    RecognitionResult,
)

logger = logging.getLogger(__name__)

# Fallback layout estimate: margins as a fraction of the image size
_MARGIN_RATIO = 0.03
_MIN_LINE_CHARS = 60


def has_valid_overlap(
    word_start: int, word_end: int, word_text: str, span: MatchSpan
) -> bool:
    """True when the word overlaps *span* by position and by content.

    The content check (one text contains the other, case-insensitively)
    rejects words that only touch a span through OCR spacing drift.
    """
    if not (word_start < span.end and word_end > span.start):
        return False
    word_lower = word_text.lower()
    span_lower = span.text.lower()
    return span_lower in word_lower or word_lower in span_lower


def _first_overlapping(
    word_start: int, word_end: int, word_text: str, spans: Sequence[MatchSpan]
) -> Optional[MatchSpan]:
    for span in spans:
        if has_valid_overlap(word_start, word_end, word_text, span):
            return span
    return None


def map_words(
    flat_text: str, words: Iterable[OcrWord], spans: Sequence[MatchSpan]
) -> List[DetectedItem]:
    """Assign each located word to the first qualifying span.

    Words are located in *flat_text* with a cursor that only moves forward,
    so repeated tokens resolve to successive occurrences. Words that cannot
    be found are skipped and leave the cursor where it was.
    """
    items: List[DetectedItem] = []
    cursor = 0
    skipped = 0
    for word in words:
        word_text = word.text.strip()
        if not word_text:
            continue
        index = flat_text.find(word_text, cursor)
        if index == -1:
            skipped += 1
            continue
        word_start, word_end = index, index + len(word_text)
        cursor = word_end

        span = _first_overlapping(word_start, word_end, word_text, spans)
        if span is not None:
            items.append(DetectedItem(text=word_text, category=span.category, bbox=word.bbox))

    if skipped:
        logger.debug("%d OCR words could not be located in the flat text", skipped)
    return items


def estimate_boxes(
    flat_text: str, spans: Sequence[MatchSpan], width: int, height: int
) -> List[DetectedItem]:
    """Approximate redaction boxes from line and character positions.

    Used only when the recognizer returns no word tree. Boxes may over- or
    under-cover the real text.
    """
    left_margin = int(width * _MARGIN_RATIO)
    top_margin = int(height * _MARGIN_RATIO)
    text_width = width - left_margin * 2
    text_height = height - top_margin * 2

    all_lines = flat_text.split("\n")
    non_empty = [line for line in all_lines if line.strip()]
    max_line_length = max([len(line) for line in non_empty] + [_MIN_LINE_CHARS])
    char_width = text_width // max_line_length
    line_height = text_height // max(len(all_lines), 1)

    x_padding = char_width * 2
    y_padding = int(line_height * 0.1)

    items: List[DetectedItem] = []
    current_y = top_margin
    for line in all_lines:
        for span in spans:
            offset = line.find(span.text)
            if offset == -1:
                continue
            x0 = left_margin + offset * char_width - x_padding
            x1 = x0 + len(span.text) * char_width + x_padding * 2
            items.append(
                DetectedItem(
                    text=span.text,
                    category=span.category,
                    bbox=BoundingBox(
                        x0=max(0, x0),
                        y0=max(0, current_y - y_padding),
                        x1=min(width, x1),
                        y1=min(height, current_y + line_height + y_padding),
                    ),
                )
            )
        current_y += line_height
    return items


class PositionalMapper:
    """Produce word-granular redaction targets for a recognition result."""

    def map(
        self,
        recognition: RecognitionResult,
        spans: Sequence[MatchSpan],
        image_size: Optional[tuple] = None,
    ) -> List[DetectedItem]:
        if not spans:
            return []
        if recognition.has_word_tree:
            return map_words(recognition.text, recognition.iter_words(), spans)
        if image_size is None:
            logger.warning("No word tree and no image size; nothing can be boxed")
            return []
        logger.info("Recognizer returned no word tree; estimating box positions")
        width, height = image_size
        return estimate_boxes(recognition.text, spans, width, height)
