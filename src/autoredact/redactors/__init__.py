"""Raster redaction module."""

from .base import BaseRedactor
from .raster_redactor import RasterRedactor

__all__ = ["BaseRedactor", "RasterRedactor"]
