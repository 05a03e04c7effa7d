"""Abstract base class for sensitive information detectors."""

from abc import ABC, abstractmethod

from ..models.entities import DetectionConfig, DetectionResult


class BaseDetector(ABC):
    """Interface for sensitive information detectors."""

    @abstractmethod
    def detect(self, text: str, config: DetectionConfig) -> DetectionResult:
        """
        Detect sensitive information in recognized text.

        Implementations must be pure: the same (text, config) always yields
        the same spans and breakdown, and *config* is never modified.

        Args:
            text: Flat text recovered from one image or page.
            config: Category toggles, allowlist and custom rules.

        Returns:
            DetectionResult with spans in category precedence order.
        """
