"""
Text Extractor Module

Extracts plain text from uploaded documents.
- PDF inputs are parsed page by page and concatenated
- Other inputs are decoded as UTF-8 text
"""

from .extractor import TextExtractor

__all__ = [
    "TextExtractor",
]
