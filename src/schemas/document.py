"""
Document Schemas

Pydantic schemas for document submission, processing and listing endpoints.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class DocumentCreateRequest(BaseModel):
    """Request body for submitting an extracted document.

    Attributes:
        filename: Original file name.
        text: Extracted plain text.
        mime_type: MIME type of the original file.
        category: Category to assign; the categorizer picks one when omitted.
        is_legacy: Flag historical data.
    """

    filename: str = Field(..., min_length=1, max_length=255, examples=["leave-policy.txt"])
    text: str = Field(..., min_length=1)
    mime_type: str = Field("text/plain", max_length=255)
    category: str | None = Field(None, max_length=100)
    is_legacy: bool = False


class DocumentProcessResponse(BaseModel):
    """Response after processing completes.

    Attributes:
        document_id: UUID of the processed document.
        status: Document status after processing.
        num_chunks: Number of chunks stored.
        message: Human-readable status message.
    """

    document_id: uuid.UUID
    status: str
    num_chunks: int
    message: str


class DocumentResponse(BaseModel):
    """Detailed document representation.

    Attributes:
        id: Document UUID.
        filename: Original file name.
        mime_type: MIME type.
        category: Assigned category.
        tags: Generated tags.
        is_legacy: Historical data flag.
        status: Processing status.
        summary: Short display summary.
        error_message: Last processing error.
        created_at: Record creation timestamp.
        num_chunks: Total number of chunks.
    """

    id: uuid.UUID
    filename: str
    mime_type: str
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_legacy: bool = False
    status: str
    summary: str | None = None
    error_message: str | None = None
    created_at: datetime
    num_chunks: int = 0


class DocumentListResponse(BaseModel):
    """Response for listing documents.

    Attributes:
        documents: List of document summaries.
        total: Total number of documents.
        categories: Document count per category.
    """

    documents: list[DocumentResponse]
    total: int
    categories: dict[str, int] = Field(default_factory=dict)


class ChunkResponse(BaseModel):
    """Stored chunk representation."""

    chunk_index: int
    content: str
    word_count: int
    start_position: int
    end_position: int
    section_title: str | None = None


class ChunkListResponse(BaseModel):
    """Chunks of one document in chunk_index order."""

    document_id: uuid.UUID
    chunks: list[ChunkResponse]
    total: int


class CategoryResponse(BaseModel):
    """One entry of the fixed category table."""

    name: str
    description: str
    keywords: list[str]
