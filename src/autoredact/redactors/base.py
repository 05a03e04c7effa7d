"""Abstract base class for raster redactors."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from PIL import Image

from ..models.entities import DetectedItem


class BaseRedactor(ABC):
    """Interface for redactors that paint over detected regions."""

    @abstractmethod
    def apply_redactions(
        self,
        raster: Image.Image,
        items: List[DetectedItem],
        output_size: Optional[Tuple[int, int]] = None,
    ) -> Image.Image:
        """
        Cover every item on a copy of *raster* and return the result.

        Args:
            raster: Color raster in the coordinate space of the item boxes.
            items: Word-granular redaction targets.
            output_size: (width, height) of the returned raster. Defaults to
                the size of *raster*.

        Returns:
            The redacted raster; *raster* itself is not modified.
        """
