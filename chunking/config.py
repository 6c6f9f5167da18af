"""
Chunking Configuration

Module-specific settings for text chunking.
"""
import os

# =========================
# Chunk Size Settings
# =========================

# Target maximum characters per chunk
CHUNKING_DEFAULT_CHUNK_SIZE = int(os.getenv("CHUNKING_DEFAULT_CHUNK_SIZE", "2000"))

# Characters shared between consecutive chunks
CHUNKING_DEFAULT_OVERLAP = int(os.getenv("CHUNKING_DEFAULT_OVERLAP", "100"))

# =========================
# Separators
# =========================

# Regex separators tried in priority order: paragraph, line, sentence end, word.
# A hard character cut is used when none of them applies.
CHUNKING_SEPARATORS = [
    r"\n\n",
    r"\n",
    r"(?<=[.!?]) ",
    r" ",
]
