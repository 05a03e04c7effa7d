"""Main redaction pipeline orchestrator."""

import logging
import time
from typing import Optional, Tuple

from PIL import Image

from .detectors.base import BaseDetector
from .errors import SourceLoadError
from .extractors.base import BaseRecognizer, ProgressCallback
from .extractors.sources import SourceLoader
from .mapping import PositionalMapper
from .models.entities import (
    DetectionConfig,
    RecognitionResult,
    ScanResult,
    SourceRef,
)
from .preprocessing import preprocess_image
from .redactors.base import BaseRedactor

logger = logging.getLogger(__name__)


class RedactionPipeline:
    """Orchestrates preprocess -> recognize -> detect -> map -> redact.

    The source raster is upscaled by ``upscale`` to give the recognizer more
    pixels per glyph. Two copies are kept: a color raster that is redacted and
    resampled back to the source size, and a preprocessed grayscale copy that
    is only used for recognition.
    """

    def __init__(
        self,
        loader: SourceLoader,
        recognizer: BaseRecognizer,
        detector: BaseDetector,
        redactor: BaseRedactor,
        mapper: Optional[PositionalMapper] = None,
        upscale: int = 2,
    ):
        self.loader = loader
        self.recognizer = recognizer
        self.detector = detector
        self.redactor = redactor
        self.mapper = mapper or PositionalMapper()
        self.upscale = max(1, int(upscale))

    def process(
        self,
        source: SourceRef,
        config: DetectionConfig,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ScanResult:
        """Run the full pipeline on one source synchronously."""
        logger.info("Loading %s...", source.name)
        return self.process_image(self.loader.load(source), config, on_progress)

    async def process_async(
        self,
        source: SourceRef,
        config: DetectionConfig,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ScanResult:
        """Run the full pipeline on one source, awaiting the recognizer."""
        logger.info("Loading %s...", source.name)
        image = self.loader.load(source)
        color, ocr_raster = self._prepare(image)

        logger.info("Recognizing text (async)...")
        recognition = await self.recognizer.recognize_async(ocr_raster, on_progress)
        return self._finish(image.size, color, recognition, config)

    def process_image(
        self,
        image: Image.Image,
        config: DetectionConfig,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ScanResult:
        """Run the pipeline on an already decoded raster."""
        color, ocr_raster = self._prepare(image)

        logger.info("Recognizing text...")
        recognition = self.recognizer.recognize(ocr_raster, on_progress)
        return self._finish(image.size, color, recognition, config)

    def _prepare(self, image: Image.Image) -> Tuple[Image.Image, Image.Image]:
        width, height = image.size
        if width <= 0 or height <= 0:
            raise SourceLoadError(
                "Invalid image dimensions: width and height must be positive"
            )
        upscaled_size = (width * self.upscale, height * self.upscale)
        color = image.convert("RGBA")
        if self.upscale != 1:
            color = color.resize(upscaled_size, Image.Resampling.BICUBIC)
        return color, preprocess_image(color)

    def _finish(
        self,
        output_size: Tuple[int, int],
        color: Image.Image,
        recognition: RecognitionResult,
        config: DetectionConfig,
    ) -> ScanResult:
        logger.info("Detecting sensitive data...")
        detection = self.detector.detect(recognition.text, config)
        logger.info(
            "Found %d sensitive items (%s)",
            detection.breakdown.total,
            detection.breakdown.to_dict(),
        )

        items = self.mapper.map(recognition, detection.spans, image_size=color.size)

        logger.info("Applying redactions...")
        start_time = time.time()
        raster = self.redactor.apply_redactions(color, items, output_size=output_size)
        logger.info(
            "Applied %d redaction boxes in %.2fs", len(items), time.time() - start_time
        )

        return ScanResult(
            items=items,
            breakdown=detection.breakdown,
            raster=raster,
            text=recognition.text,
        )
