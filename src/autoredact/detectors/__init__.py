"""Sensitive information detection modules."""

from .base import BaseDetector
from .pattern_detector import PatternDetector

__all__ = ["BaseDetector", "PatternDetector"]
