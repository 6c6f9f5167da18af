"""
Chunked summarization for documents larger than the LLM input limit.

Pipeline:
1. Split document text into overlapping chunks
2. Summarize chunks in fixed-size batches, concurrently within a batch,
   with a cooldown between batches (rate limit courtesy)
3. Combine section summaries into one final summary

Each chunk is retried on transient failures. A chunk rejected as too large
is re-split into smaller pieces whose summaries are joined in order.
"""
import time
import asyncio
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from chunking.chunker import RecursiveTextSplitter, split_text
from core import BackoffPolicy, LLMError, PayloadTooLargeError, EmptyDocumentError
from logs.logging_config import get_llm_logger
from .config import (
    SUMMARIZATION_DEFAULT_MODEL,
    SUMMARIZATION_CHUNK_SIZE,
    SUMMARIZATION_CHUNK_OVERLAP,
    SUMMARIZATION_BATCH_SIZE,
    SUMMARIZATION_MAX_RETRIES,
    SUMMARIZATION_INITIAL_DELAY,
    SUMMARIZATION_RETRY_DELAY,
    SUMMARIZATION_BATCH_COOLDOWN,
    SUMMARIZATION_COMBINE_DELAY,
)
from .llm_client import create_llm_client
from .prompts import (
    SECTION_SEPARATOR,
    get_section_summary_prompt,
    get_final_combine_prompt,
)

logger = get_llm_logger()


@dataclass
class SummarizerConfig:
    """Configuration for chunked summarization."""
    chunk_size: int = SUMMARIZATION_CHUNK_SIZE
    chunk_overlap: int = SUMMARIZATION_CHUNK_OVERLAP
    batch_size: int = SUMMARIZATION_BATCH_SIZE
    max_retries: int = SUMMARIZATION_MAX_RETRIES
    model: str = field(default_factory=lambda: SUMMARIZATION_DEFAULT_MODEL)


def default_backoff_policy() -> BackoffPolicy:
    """Backoff policy from module settings."""
    return BackoffPolicy(
        initial_delay=SUMMARIZATION_INITIAL_DELAY,
        retry_delay=SUMMARIZATION_RETRY_DELAY,
        batch_cooldown=SUMMARIZATION_BATCH_COOLDOWN,
        combine_delay=SUMMARIZATION_COMBINE_DELAY,
    )


def partition_batches(items: List[Any], batch_size: int) -> List[List[Any]]:
    """Split items into consecutive groups of batch_size (last group may be shorter)."""
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    return [items[i:i + batch_size] for i in range(0, len(items), batch_size)]


class SectionSummarizer:
    """
    Summarizes one chunk with retry.

    - Transient failure: wait retry cooldown, retry the same chunk
    - Payload too large: re-split the chunk at half its length and summarize
      each piece in order; pieces keep the parent's ordinal/total labels
    - Retries exhausted: the error propagates
    """

    def __init__(
        self,
        client,
        backoff: BackoffPolicy,
        chunk_overlap: int = SUMMARIZATION_CHUNK_OVERLAP,
        max_retries: int = SUMMARIZATION_MAX_RETRIES
    ):
        """
        Args:
            client: Completion client exposing generate_text_with_logging()
            backoff: Cooldown policy
            chunk_overlap: Overlap used when re-splitting oversized chunks
            max_retries: Default retry budget per chunk
        """
        self.client = client
        self.backoff = backoff
        self.chunk_overlap = chunk_overlap
        self.max_retries = max_retries

    async def summarize(
        self,
        chunk: str,
        ordinal: int,
        total: int,
        retries_remaining: Optional[int] = None
    ) -> str:
        """
        Summarize a chunk.

        Args:
            chunk: Chunk text
            ordinal: Zero-based position of the chunk
            total: Total number of chunks
            retries_remaining: Retry budget (uses max_retries if None)

        Returns:
            Section summary, verbatim from the LLM

        Raises:
            LLMError: When the retry budget is exhausted
        """
        if retries_remaining is None:
            retries_remaining = self.max_retries

        context = f"section_{ordinal + 1}_of_{total}"

        await self.backoff.before_attempt()

        prompt = get_section_summary_prompt(chunk, ordinal, total)
        try:
            return await self.client.generate_text_with_logging(prompt, task="summarize_section")
        except LLMError as e:
            failure = e

        if retries_remaining <= 0:
            logger.error(
                f"[SECTION] {context} | retries exhausted | chars={len(chunk)} | "
                f"error={type(failure).__name__}: {failure}"
            )
            raise failure

        if isinstance(failure, PayloadTooLargeError):
            return await self._resplit(chunk, ordinal, total, retries_remaining)

        logger.warning(
            f"[SECTION] {context} | transient failure, retrying | "
            f"retries_remaining={retries_remaining} | error={failure}"
        )
        await self.backoff.before_retry()
        return await self.summarize(chunk, ordinal, total, retries_remaining - 1)

    async def _resplit(self, chunk: str, ordinal: int, total: int, retries_remaining: int) -> str:
        """Summarize an oversized chunk as smaller pieces and join the results in order."""
        resplit_size = max(1, len(chunk) // 2)
        overlap = min(self.chunk_overlap, resplit_size // 4)
        pieces = split_text(chunk, resplit_size, overlap)

        logger.warning(
            f"[SECTION] section_{ordinal + 1}_of_{total} | payload too large, re-splitting | "
            f"chars={len(chunk)} | pieces={len(pieces)} | piece_size={resplit_size} | "
            f"retries_remaining={retries_remaining}"
        )

        # Sequential so the parent's batch slot stays the only in-flight call
        summaries = []
        for piece in pieces:
            summaries.append(
                await self.summarize(piece, ordinal, total, retries_remaining - 1)
            )
        return SECTION_SEPARATOR.join(summaries)


class BatchScheduler:
    """
    Runs the SectionSummarizer over all chunks, batch_size at a time.

    Chunks in a batch run concurrently; the first failure aborts the whole
    operation (siblings already started are not cancelled). A cooldown is
    observed between batches.
    """

    def __init__(
        self,
        section_summarizer: SectionSummarizer,
        backoff: BackoffPolicy,
        batch_size: int = SUMMARIZATION_BATCH_SIZE
    ):
        self.section_summarizer = section_summarizer
        self.backoff = backoff
        self.batch_size = batch_size

    async def process_all(self, chunks: List[str], batch_size: Optional[int] = None) -> List[str]:
        """
        Summarize every chunk.

        Returns:
            Section summaries, same length and order as chunks
        """
        size = self.batch_size if batch_size is None else batch_size
        batches = partition_batches(chunks, size)
        total = len(chunks)
        num_batches = len(batches)

        logger.info(f"[BATCH] START | chunks={total} | batches={num_batches} | batch_size={size}")

        summaries: List[str] = []
        for batch_index, batch in enumerate(batches):
            offset = batch_index * size
            batch_start = time.time()

            logger.info(f"[BATCH] Batch {batch_index + 1}/{num_batches} | chunks={len(batch)}")

            # gather keeps positional order regardless of completion order
            batch_summaries = await asyncio.gather(*[
                self.section_summarizer.summarize(chunk, offset + i, total)
                for i, chunk in enumerate(batch)
            ])
            summaries.extend(batch_summaries)

            logger.info(
                f"[BATCH] Batch {batch_index + 1}/{num_batches} | done | "
                f"elapsed={time.time() - batch_start:.2f}s"
            )

            if batch_index < num_batches - 1:
                await self.backoff.between_batches()

        logger.info(f"[BATCH] END | summaries={len(summaries)}")
        return summaries


class FinalCombiner:
    """Merges section summaries into the final summary."""

    def __init__(self, client, backoff: BackoffPolicy):
        self.client = client
        self.backoff = backoff

    async def combine(self, section_summaries: List[str]) -> str:
        """
        Combine section summaries.

        A single summary is returned unchanged without calling the LLM.
        Otherwise the summaries are joined in order and synthesized with one
        LLM call. No retry: failures propagate.
        """
        if not section_summaries:
            raise ValueError("No section summaries to combine")

        if len(section_summaries) == 1:
            logger.info("[COMBINE] Single section, returning as final summary")
            return section_summaries[0]

        joined = SECTION_SEPARATOR.join(section_summaries)
        logger.info(f"[COMBINE] sections={len(section_summaries)} | chars={len(joined)}")

        await self.backoff.before_combine()
        return await self.client.generate_text_with_logging(
            get_final_combine_prompt(joined),
            task="summarize_combine"
        )


async def summarize_document_async(
    text: str,
    config: Optional[SummarizerConfig] = None,
    client=None,
    backoff: Optional[BackoffPolicy] = None,
) -> Dict:
    """
    Summarize a document: chunk, summarize in batches, combine.

    Args:
        text: Document text
        config: Summarization configuration (defaults from module config)
        client: Completion client (a summarization client is created and
            closed here if None)
        backoff: Cooldown policy (defaults from module config)

    Returns:
        Dictionary with summary and metadata

    Raises:
        EmptyDocumentError: If text has no content
        LLMError: If any chunk exhausts its retries or the combine call fails
    """
    if config is None:
        config = SummarizerConfig()
    if backoff is None:
        backoff = default_backoff_policy()

    if not text or not text.strip():
        raise EmptyDocumentError("Document contains no text to summarize")

    start_time = time.time()
    owns_client = client is None
    if owns_client:
        client = create_llm_client(config.model)

    try:
        splitter = RecursiveTextSplitter(chunk_size=config.chunk_size, chunk_overlap=config.chunk_overlap)
        chunks = splitter.split_text(text)

        logger.info(
            f"[SUMMARIZE] START | chars={len(text)} | chunks={len(chunks)} | "
            f"chunk_size={config.chunk_size} | overlap={config.chunk_overlap} | model={config.model}"
        )

        section_summarizer = SectionSummarizer(
            client,
            backoff,
            chunk_overlap=config.chunk_overlap,
            max_retries=config.max_retries
        )
        scheduler = BatchScheduler(section_summarizer, backoff, batch_size=config.batch_size)
        combiner = FinalCombiner(client, backoff)

        section_summaries = await scheduler.process_all(chunks)
        final_summary = await combiner.combine(section_summaries)

    finally:
        if owns_client:
            await client.close()

    elapsed = time.time() - start_time
    logger.info(f"[SUMMARIZE] END | chunks={len(chunks)} | elapsed={elapsed:.2f}s")

    return {
        "summary": final_summary,
        "total_chunks": len(chunks),
        "total_chars": len(text),
        "batches": len(partition_batches(chunks, config.batch_size)),
        "model": config.model
    }
