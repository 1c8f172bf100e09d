"""
Document Model

Represents an uploaded HR document and its processing state.
"""

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, Enum, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class DocumentStatus(enum.StrEnum):
    """Processing lifecycle of a document."""

    UPLOADED = "UPLOADED"
    PROCESSING = "PROCESSING"
    PROCESSED = "PROCESSED"
    ERROR = "ERROR"


class Document(Base):
    """
    Uploaded document with its extracted text.

    Fields:
        id: Unique identifier
        filename: Original file name (diagnostics and source labels)
        mime_type: MIME type reported at upload
        category: Category name assigned by the categorizer or the uploader
        tags: Generated tags
        is_legacy: Historical data flag (deprioritized by search filters)
        status: UPLOADED, PROCESSING, PROCESSED or ERROR
        extracted_text: Plain text the chunks are derived from
        summary: Short display summary
        error_message: Last processing error, if any
        created_at: Record creation timestamp
        updated_at: Last modification timestamp
    """

    __tablename__ = "documents"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False, default="text/plain")
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    is_legacy: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus), nullable=False, default=DocumentStatus.UPLOADED
    )
    extracted_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    # Relationships
    chunks: Mapped[list["Chunk"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        "Chunk",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="Chunk.chunk_index",
    )

    def __repr__(self) -> str:
        return f"<Document {self.filename} {self.status} id={self.id}>"
