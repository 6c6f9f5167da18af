"""
Chunker

Recursive character splitting with overlap.
Takes plain document text and creates size-bounded chunks, preferring
natural boundaries (paragraph > line > sentence > word) over hard cuts.

Every chunk is an exact substring of the input, so the source text can be
rebuilt from the chunks and their offsets.
"""

import re
import logging
from collections import deque
from typing import List, Optional, Tuple

from .schemas import TextChunk
from .config import (
    CHUNKING_DEFAULT_CHUNK_SIZE,
    CHUNKING_DEFAULT_OVERLAP,
    CHUNKING_SEPARATORS,
)

logger = logging.getLogger(__name__)

Span = Tuple[int, int]


class RecursiveTextSplitter:
    """
    Splits text into chunks of at most chunk_size characters.

    The text is first cut at the highest priority separator. Any piece that is
    still too large is cut again with the next separator, down to a hard
    character cut. The resulting pieces are then merged greedily into chunks,
    carrying trailing pieces of up to chunk_overlap characters into the next
    chunk.

    Separators stay attached to the piece on their left.
    """

    def __init__(
        self,
        chunk_size: int = CHUNKING_DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = CHUNKING_DEFAULT_OVERLAP,
        separators: Optional[List[str]] = None
    ):
        """
        Initialize splitter.

        Args:
            chunk_size: Maximum characters per chunk
            chunk_overlap: Maximum characters shared by consecutive chunks
            separators: Regex separators in priority order (uses config if None)
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0:
            raise ValueError(f"chunk_overlap must not be negative, got {chunk_overlap}")

        self.chunk_size = chunk_size
        # Overlap must leave room for new content in every chunk
        self.chunk_overlap = min(chunk_overlap, chunk_size - 1)
        self._separators = [
            re.compile(pattern)
            for pattern in (separators if separators is not None else CHUNKING_SEPARATORS)
        ]

    def split_text(self, text: str) -> List[str]:
        """Split text into chunk strings."""
        return [text[start:end] for start, end in self.split_spans(text)]

    def split_chunks(self, text: str) -> List[TextChunk]:
        """Split text into TextChunk objects carrying ordinal, total and offset."""
        spans = self.split_spans(text)
        total = len(spans)
        return [
            TextChunk(text=text[start:end], ordinal=i, total=total, start=start)
            for i, (start, end) in enumerate(spans)
        ]

    def split_spans(self, text: str) -> List[Span]:
        """
        Compute (start, end) offsets of each chunk.

        Returns:
            Ordered spans; empty list for empty text.
        """
        if not text:
            return []

        if len(text) <= self.chunk_size:
            return [(0, len(text))]

        pieces = self._split_recursive(text, 0, len(text), 0)
        spans = self._merge(pieces)

        logger.debug(
            f"[CHUNKER] chars={len(text)} | pieces={len(pieces)} | chunks={len(spans)} | "
            f"chunk_size={self.chunk_size} | overlap={self.chunk_overlap}"
        )
        return spans

    def _split_recursive(self, text: str, start: int, end: int, level: int) -> List[Span]:
        """Cut text[start:end] into pieces no longer than chunk_size."""
        if end - start <= self.chunk_size:
            return [(start, end)]

        if level >= len(self._separators):
            return self._hard_cut(start, end)

        pieces = self._cut_at(text, start, end, self._separators[level])
        if len(pieces) == 1:
            return self._split_recursive(text, start, end, level + 1)

        result = []
        for piece_start, piece_end in pieces:
            result.extend(self._split_recursive(text, piece_start, piece_end, level + 1))
        return result

    @staticmethod
    def _cut_at(text: str, start: int, end: int, pattern: re.Pattern) -> List[Span]:
        """Cut text[start:end] after every match of pattern."""
        pieces = []
        piece_start = start

        for match in pattern.finditer(text, start, end):
            cut = match.end()
            if cut <= piece_start or cut >= end:
                continue
            pieces.append((piece_start, cut))
            piece_start = cut

        pieces.append((piece_start, end))
        return pieces

    def _hard_cut(self, start: int, end: int) -> List[Span]:
        return [
            (pos, min(pos + self.chunk_size, end))
            for pos in range(start, end, self.chunk_size)
        ]

    def _merge(self, pieces: List[Span]) -> List[Span]:
        """Greedily merge contiguous pieces into chunks with overlap."""
        chunks: List[Span] = []
        window = deque()
        window_len = 0

        for piece_start, piece_end in pieces:
            length = piece_end - piece_start

            if window and window_len + length > self.chunk_size:
                chunks.append((window[0][0], window[-1][1]))

                # Keep only the trailing pieces that fit in the overlap
                while window and (
                    window_len > self.chunk_overlap
                    or window_len + length > self.chunk_size
                ):
                    dropped_start, dropped_end = window.popleft()
                    window_len -= dropped_end - dropped_start

            window.append((piece_start, piece_end))
            window_len += length

        if window:
            chunks.append((window[0][0], window[-1][1]))

        return chunks


def split_text(
    text: str,
    max_chunk_size: int = CHUNKING_DEFAULT_CHUNK_SIZE,
    overlap: int = CHUNKING_DEFAULT_OVERLAP
) -> List[str]:
    """
    Split text into ordered chunks of at most max_chunk_size characters.

    Args:
        text: The text to split
        max_chunk_size: Maximum characters per chunk
        overlap: Maximum characters shared by consecutive chunks

    Returns:
        List of chunk strings (empty for empty text)
    """
    return RecursiveTextSplitter(chunk_size=max_chunk_size, chunk_overlap=overlap).split_text(text)
