"""
Chunk Model

Represents a retrievable span of a document's cleaned text.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.models.base import Base


class Chunk(Base):
    """
    Text chunk belonging to exactly one document.

    Fields:
        id: Unique identifier
        document_id: Foreign key to Document
        chunk_index: Contiguous 0-based position within the document
        content: Cleaned chunk text
        word_count: Whitespace-delimited token count of content
        start_position: Approximate start offset in the cleaned source text
        end_position: Approximate end offset in the cleaned source text
        section_title: Header of the section the chunk was cut from
        created_at: Record creation timestamp
    """

    __tablename__ = "chunks"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    document_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("documents.id", ondelete="CASCADE"), nullable=False
    )
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    word_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    start_position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    end_position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    section_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        nullable=False, default=lambda: datetime.now(UTC).replace(tzinfo=None)
    )

    # Relationships
    document: Mapped["Document"] = relationship(  # type: ignore[name-defined]  # noqa: F821
        "Document", back_populates="chunks"
    )

    def __repr__(self) -> str:
        return f"<Chunk #{self.chunk_index} doc={self.document_id} id={self.id}>"
