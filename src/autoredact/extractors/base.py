"""Abstract base class for text recognizers."""

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional

from PIL import Image

from ..models.entities import RecognitionResult

ProgressCallback = Callable[[float], None]


class BaseRecognizer(ABC):
    """Interface for OCR engines that return flat text plus a word tree."""

    @abstractmethod
    def recognize(
        self,
        image: Image.Image,
        on_progress: Optional[ProgressCallback] = None,
    ) -> RecognitionResult:
        """
        Recognize text in a raster (synchronous).

        Args:
            image: Raster prepared for recognition.
            on_progress: Optional callback receiving fractional progress
                in [0, 1].

        Returns:
            RecognitionResult whose word boxes are in *image* pixel space.

        Raises:
            RecognitionError: If the engine fails.
        """

    async def recognize_async(
        self,
        image: Image.Image,
        on_progress: Optional[ProgressCallback] = None,
    ) -> RecognitionResult:
        """
        Recognize text without blocking the event loop.

        Default implementation runs ``recognize`` in the loop's default
        executor. Subclasses wrapping a natively async engine may override.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.recognize, image, on_progress)
