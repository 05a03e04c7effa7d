"""Sensitive data detection and raster redaction pipeline."""

from .batch import BatchOrchestrator
from .detectors import PatternDetector
from .factory import build_batch, build_pipeline
from .mapping import PositionalMapper
from .models.entities import (
    BatchItem,
    BatchProgress,
    BatchStatus,
    Breakdown,
    Category,
    DetectedItem,
    DetectionConfig,
    MatchSpan,
    ScanResult,
)
from .pipeline import RedactionPipeline

__all__ = [
    "BatchItem",
    "BatchOrchestrator",
    "BatchProgress",
    "BatchStatus",
    "Breakdown",
    "Category",
    "DetectedItem",
    "DetectionConfig",
    "MatchSpan",
    "PatternDetector",
    "PositionalMapper",
    "RedactionPipeline",
    "ScanResult",
    "build_batch",
    "build_pipeline",
]
