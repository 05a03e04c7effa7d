"""PDF page rasterization using PyMuPDF."""

import logging
import os

import fitz  # PyMuPDF
from PIL import Image

from ..errors import ResourceLimitExceeded, SourceLoadError

logger = logging.getLogger(__name__)


class PDFPageRasterizer:
    """Render PDF pages to RGBA rasters, enforcing document ceilings.

    ``inspect`` checks the file size before the document is opened and the
    page count before any page is rendered, so an oversized document is
    rejected without rasterizing anything.
    """

    def __init__(
        self,
        scale: float = 2.0,
        max_size_bytes: int = 10 * 1024 * 1024,
        max_pages: int = 20,
    ):
        self.scale = scale
        self.max_size_bytes = max_size_bytes
        self.max_pages = max_pages

    def inspect(self, pdf_path: str) -> int:
        """
        Validate a document against the configured ceilings.

        Args:
            pdf_path: Path to the PDF file.

        Returns:
            Number of pages.

        Raises:
            ResourceLimitExceeded: If the file or its page count is too large.
            SourceLoadError: If the file cannot be opened as a PDF.
        """
        try:
            size = os.path.getsize(pdf_path)
        except OSError as e:
            raise SourceLoadError(f"Cannot read {pdf_path}: {e}") from e

        if size > self.max_size_bytes:
            raise ResourceLimitExceeded(
                f"PDF too large ({size / (1024 * 1024):.1f}MB). "
                f"Maximum: {self.max_size_bytes / (1024 * 1024):.0f}MB"
            )

        page_count = self.get_page_count(pdf_path)
        if page_count > self.max_pages:
            raise ResourceLimitExceeded(
                f"Too many pages ({page_count}). Maximum: {self.max_pages} pages"
            )
        return page_count

    def get_page_count(self, pdf_path: str) -> int:
        """Get the number of pages in a PDF."""
        try:
            with fitz.open(pdf_path) as doc:
                return doc.page_count
        except (RuntimeError, OSError, ValueError) as e:
            raise SourceLoadError(f"Failed to open PDF {pdf_path}: {e}") from e

    def rasterize(self, pdf_path: str, page_number: int) -> Image.Image:
        """
        Render one page (0-indexed) at ``scale`` to an RGBA raster.

        Raises:
            SourceLoadError: If the document or page cannot be rendered.
        """
        try:
            with fitz.open(pdf_path) as doc:
                if not 0 <= page_number < doc.page_count:
                    raise SourceLoadError(
                        f"Page {page_number + 1} out of range for {pdf_path}"
                    )
                page = doc[page_number]
                pix = page.get_pixmap(matrix=fitz.Matrix(self.scale, self.scale), alpha=False)
                image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        except SourceLoadError:
            raise
        except (RuntimeError, OSError, ValueError) as e:
            raise SourceLoadError(
                f"Failed to render page {page_number + 1} of {pdf_path}: {e}"
            ) from e

        logger.debug("Rendered page %d at %dx%d", page_number + 1, image.width, image.height)
        return image.convert("RGBA")
