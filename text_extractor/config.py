"""
Text Extractor Configuration

Module-specific settings for document text extraction.
"""

# =========================
# Content Types
# =========================

# Declared content types parsed as PDF; everything else is decoded as UTF-8 text
EXTRACTOR_PDF_CONTENT_TYPES = {"application/pdf"}

# Separator placed between the text of consecutive PDF pages
EXTRACTOR_PAGE_SEPARATOR = "\n"

# Text encoding for non-PDF uploads
EXTRACTOR_TEXT_ENCODING = "utf-8"
