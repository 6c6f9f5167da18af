"""
Text Extractor

Extracts plain text from uploaded document bytes.
- PDF: parsed page by page with PyMuPDF, pages joined in order
- Anything else: decoded as UTF-8 text
"""

import logging
from typing import Optional

import fitz  # PyMuPDF for PDF

from core.exceptions import ExtractionError
from .config import (
    EXTRACTOR_PDF_CONTENT_TYPES,
    EXTRACTOR_PAGE_SEPARATOR,
    EXTRACTOR_TEXT_ENCODING,
)

logger = logging.getLogger(__name__)


class TextExtractor:
    """
    Extracts text from uploaded files based on their declared content type.

    No partial extraction: any failure raises ExtractionError.
    """

    def extract(self, content: bytes, content_type: Optional[str]) -> str:
        """
        Extract text from document bytes.

        Args:
            content: Raw file bytes
            content_type: Declared MIME type (may carry parameters, e.g. '; charset=utf-8')

        Returns:
            Plain text of the document
        """
        mime = (content_type or "").split(";")[0].strip().lower()

        if mime in EXTRACTOR_PDF_CONTENT_TYPES:
            return self._extract_pdf(content)

        return self._extract_text(content)

    def _extract_pdf(self, content: bytes) -> str:
        """Extract text from PDF bytes using PyMuPDF."""
        try:
            doc = fitz.open(stream=content, filetype="pdf")
        except Exception as e:
            logger.error(f"[EXTRACT] Could not open PDF | bytes={len(content)} | error={e}")
            raise ExtractionError(f"Could not open PDF: {e}") from e

        try:
            pages = [page.get_text("text") for page in doc]
        except Exception as e:
            logger.error(f"[EXTRACT] PDF text extraction failed | error={e}")
            raise ExtractionError(f"PDF text extraction failed: {e}") from e
        finally:
            doc.close()

        text = EXTRACTOR_PAGE_SEPARATOR.join(pages)
        logger.info(f"[EXTRACT] PDF | pages={len(pages)} | chars={len(text)}")
        return text

    def _extract_text(self, content: bytes) -> str:
        """Decode a plain text upload. Invalid byte sequences become U+FFFD."""
        text = content.decode(EXTRACTOR_TEXT_ENCODING, errors="replace")

        logger.info(f"[EXTRACT] Text | chars={len(text)}")
        return text
