"""
Schemas for the chat service.
"""
from typing import Literal, Optional
from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request model for a chat message."""
    message: Optional[str] = Field(None, description="User message")


class ChatResponse(BaseModel):
    """Successful chat reply."""
    response: str = Field(..., description="Assistant reply")
    status: Literal["success"] = "success"


class ChatErrorResponse(BaseModel):
    """Chat error body."""
    error: str = Field(..., description="User facing error message")
    status: Literal["error"] = "error"
