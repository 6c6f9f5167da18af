"""
FastAPI router for document upload and summarization.

Pipeline Architecture:
File upload → Text Extraction → Chunking → Batched Section Summaries → Final Combine
"""
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from core import BackoffPolicy, BaseLLMClient, EmptyDocumentError
from logs.logging_config import get_llm_logger, RequestContext
from text_extractor.extractor import TextExtractor
from .llm_client import create_llm_client
from .schemas import (
    UploadSummaryResponse,
    ErrorResponse,
    SummarizerConfigResponse,
)
from .summarizer import (
    summarize_document_async,
    default_backoff_policy,
    SummarizerConfig,
)

logger = get_llm_logger()

router = APIRouter(prefix="/api", tags=["Summarization"])

NO_FILE_MESSAGE = "No file provided"
NO_TEXT_MESSAGE = "No text could be extracted from the file"
PROCESSING_ERROR_MESSAGE = "Error processing file"


# =====================
# Dependencies
# =====================

async def get_summarization_client():
    """Request-scoped summarization LLM client."""
    client = create_llm_client()
    try:
        yield client
    finally:
        await client.close()


def get_backoff_policy() -> BackoffPolicy:
    return default_backoff_policy()


def get_text_extractor() -> TextExtractor:
    return TextExtractor()


# =====================
# API Endpoints
# =====================

@router.post(
    "/upload",
    response_model=UploadSummaryResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def upload_endpoint(
    file: Optional[UploadFile] = File(None, description="Document to summarize (PDF or text)"),
    client: BaseLLMClient = Depends(get_summarization_client),
    backoff: BackoffPolicy = Depends(get_backoff_policy),
    extractor: TextExtractor = Depends(get_text_extractor),
):
    """
    Summarize an uploaded document.

    **Pipeline Flow:**
    1. Extract text (PDF parsed page by page, anything else decoded as UTF-8)
    2. Split into overlapping chunks
    3. Summarize chunks in rate-limited batches
    4. Combine section summaries into one summary

    **Returns:**
    - `summary` on success
    - `error` with status 400 (no file / no text) or 500 (processing failure)
    """
    request_id = str(uuid.uuid4())

    with RequestContext(request_id):
        if file is None:
            logger.warning(f"[UPLOAD] REJECTED | request_id={request_id} | reason=no_file")
            return JSONResponse(status_code=400, content={"error": NO_FILE_MESSAGE})

        filename = file.filename or "unknown"
        logger.info(
            f"[UPLOAD] START | request_id={request_id} | filename={filename} | "
            f"content_type={file.content_type}"
        )

        try:
            content = await file.read()
            text = await run_in_threadpool(extractor.extract, content, file.content_type)

            result = await summarize_document_async(
                text,
                config=SummarizerConfig(),
                client=client,
                backoff=backoff
            )

        except EmptyDocumentError:
            logger.warning(f"[UPLOAD] REJECTED | request_id={request_id} | reason=empty_document")
            return JSONResponse(status_code=400, content={"error": NO_TEXT_MESSAGE})

        except Exception as e:
            logger.error(
                f"[UPLOAD] ERROR | request_id={request_id} | filename={filename} | "
                f"error={type(e).__name__}: {e}"
            )
            return JSONResponse(status_code=500, content={"error": PROCESSING_ERROR_MESSAGE})

        finally:
            await file.close()

        logger.info(
            f"[UPLOAD] END | request_id={request_id} | chunks={result['total_chunks']} | "
            f"batches={result['batches']} | summary_chars={len(result['summary'])}"
        )
        return UploadSummaryResponse(summary=result["summary"])


@router.get("/upload/config", response_model=SummarizerConfigResponse)
async def get_default_config():
    """
    Get the default summarization configuration.
    """
    config = SummarizerConfig()
    backoff = default_backoff_policy()
    return SummarizerConfigResponse(
        model=config.model,
        chunk_size=config.chunk_size,
        chunk_overlap=config.chunk_overlap,
        batch_size=config.batch_size,
        max_retries=config.max_retries,
        initial_delay=backoff.initial_delay,
        retry_delay=backoff.retry_delay,
        batch_cooldown=backoff.batch_cooldown,
        combine_delay=backoff.combine_delay,
    )
