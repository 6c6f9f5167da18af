"""
Chunking Module

Splits document text into size-bounded, overlapping chunks using a
recursive separator search (paragraph > line > sentence > word > character).
"""

from .chunker import RecursiveTextSplitter, split_text
from .schemas import TextChunk

__all__ = [
    "RecursiveTextSplitter",
    "split_text",
    "TextChunk",
]
