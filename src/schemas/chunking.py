"""
Chunking Schemas

Pydantic schemas for sectioning and chunking output.
"""

import uuid

from pydantic import BaseModel


class Section(BaseModel):
    """Heading-delimited span of cleaned text, used only to guide chunk boundaries.

    Attributes:
        header: Heading label (markdown hashes and trailing colon removed).
        content: Section text, starting with the heading line.
        kind: Heading pattern kind that opened the section.
        start_offset: Offset of the section start in the cleaned text.
    """

    header: str
    content: str
    kind: str
    start_offset: int = 0


class RawChunk(BaseModel):
    """Chunk candidate produced by the paragraph chunker.

    Attributes:
        content: Chunk text.
        start_offset: Approximate start offset in the chunked text.
        end_offset: Approximate end offset in the chunked text.
        section_title: Header of the originating section, if any.
    """

    content: str
    start_offset: int
    end_offset: int
    section_title: str | None = None


class ChunkData(BaseModel):
    """Output of the chunking process for a single chunk.

    Attributes:
        document_id: Owning document.
        chunk_index: Contiguous 0-based index within the document.
        content: Cleaned chunk text.
        word_count: Whitespace-delimited token count of content.
        start_position: Approximate start offset in the cleaned document text.
        end_position: Approximate end offset in the cleaned document text.
        section_title: Header of the originating section, if any.
    """

    document_id: uuid.UUID | None = None
    chunk_index: int
    content: str
    word_count: int
    start_position: int
    end_position: int
    section_title: str | None = None
