"""
Search Schemas

Pydantic schemas for lexical search and context assembly.
"""

import uuid

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    """Request body for chunk search.

    Attributes:
        query: Free-text query.
        max_results: Maximum number of hits.
        categories: Restrict to documents in these categories.
        exclude_legacy: Skip documents flagged as legacy data.
        document_id: Restrict to one document.
    """

    query: str = Field(..., min_length=1, max_length=1000, examples=["vacation policy"])
    max_results: int = Field(5, ge=1, le=50)
    categories: list[str] = Field(default_factory=list)
    exclude_legacy: bool = False
    document_id: uuid.UUID | None = None


class SearchHit(BaseModel):
    """One ranked chunk.

    Attributes:
        document_id: Owning document.
        filename: Owning document's filename.
        category: Owning document's category.
        chunk_index: Position of the chunk within its document.
        content: Chunk text.
        section_title: Section the chunk was cut from.
        relevance_score: Lexical score (always positive).
    """

    document_id: uuid.UUID
    filename: str
    category: str | None = None
    chunk_index: int
    content: str
    section_title: str | None = None
    relevance_score: int


class SearchResult(BaseModel):
    """Ranked hits for a query.

    Attributes:
        query: The query as received.
        hits: Hits, highest score first.
        total_candidates: Number of chunks that were scored.
        total_matches: Number of chunks with a positive score, before the
            hit list is cut to max_results.
    """

    query: str
    hits: list[SearchHit] = Field(default_factory=list)
    total_candidates: int = 0
    total_matches: int = 0


class ContextSource(BaseModel):
    """Source reference for one chunk used in a context block."""

    filename: str
    category: str | None = None
    chunk_index: int
    relevance_score: int


class ContextResult(BaseModel):
    """Context assembled from the top hits, ready for prompt formatting.

    Attributes:
        context: Source-labelled chunk texts separated by ``---`` rules.
        sources: One entry per chunk included in ``context``.
        found_relevant_content: False when nothing matched.
        total_results: Number of matching chunks, before any truncation.
    """

    context: str = ""
    sources: list[ContextSource] = Field(default_factory=list)
    found_relevant_content: bool = False
    total_results: int = 0
