"""Data models for the redaction pipeline."""

from .entities import (
    BatchItem,
    BatchItemSnapshot,
    BatchProgress,
    BatchStatus,
    BoundingBox,
    Breakdown,
    Category,
    CustomDate,
    CustomRegex,
    DetectedItem,
    DetectionConfig,
    DetectionResult,
    ImageSource,
    MatchSpan,
    OcrBlock,
    OcrLine,
    OcrParagraph,
    OcrWord,
    PageSource,
    RecognitionResult,
    ScanResult,
    SourceRef,
)

__all__ = [
    "BatchItem",
    "BatchItemSnapshot",
    "BatchProgress",
    "BatchStatus",
    "BoundingBox",
    "Breakdown",
    "Category",
    "CustomDate",
    "CustomRegex",
    "DetectedItem",
    "DetectionConfig",
    "DetectionResult",
    "ImageSource",
    "MatchSpan",
    "OcrBlock",
    "OcrLine",
    "OcrParagraph",
    "OcrWord",
    "PageSource",
    "RecognitionResult",
    "ScanResult",
    "SourceRef",
]
