"""
Schemas for the chunking module.
"""
from pydantic import BaseModel, ConfigDict, Field


class TextChunk(BaseModel):
    """A bounded substring of the document text with its position."""
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Chunk content, an exact substring of the source text")
    ordinal: int = Field(..., ge=0, description="Zero-based position of the chunk")
    total: int = Field(..., ge=1, description="Total number of chunks at split time")
    start: int = Field(..., ge=0, description="Character offset of the chunk in the source text")

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    @property
    def label(self) -> str:
        """Human readable position, e.g. '2/5'."""
        return f"{self.ordinal + 1}/{self.total}"
