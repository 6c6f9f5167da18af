"""
Pydantic schemas for the document upload / summarization API.
"""
from pydantic import BaseModel, Field


class UploadSummaryResponse(BaseModel):
    """Response for a summarized upload."""
    summary: str = Field(..., description="Final summary of the uploaded document")


class ErrorResponse(BaseModel):
    """Error body returned by the upload endpoint."""
    error: str = Field(..., description="User facing error message")


class SummarizerConfigResponse(BaseModel):
    """Default summarization settings."""
    model: str
    chunk_size: int
    chunk_overlap: int
    batch_size: int
    max_retries: int
    initial_delay: float
    retry_delay: float
    batch_cooldown: float
    combine_delay: float
