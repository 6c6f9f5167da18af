"""
Summarization Module

Summarizes documents larger than the LLM input limit:
- Splits text into overlapping chunks
- Summarizes chunks in rate-limited batches, with retry and
  re-splitting of chunks rejected as too large
- Combines section summaries into a final summary
"""

from .service import router
from .summarizer import (
    summarize_document_async,
    SummarizerConfig,
    SectionSummarizer,
    BatchScheduler,
    FinalCombiner,
    default_backoff_policy,
)
from .schemas import UploadSummaryResponse, ErrorResponse

__all__ = [
    # Router
    "router",
    # Pipeline
    "summarize_document_async",
    "SummarizerConfig",
    "SectionSummarizer",
    "BatchScheduler",
    "FinalCombiner",
    "default_backoff_policy",
    # Schemas
    "UploadSummaryResponse",
    "ErrorResponse",
]
