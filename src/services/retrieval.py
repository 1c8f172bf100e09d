"""
Retrieval Service

Loads candidate chunks from storage, ranks them with lexical search and
assembles a source-labelled context block for chat answers.
"""

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.models.chunk import Chunk
from src.repositories.chunk import ChunkRepository
from src.schemas.search import ContextResult, ContextSource, SearchHit, SearchResult
from src.services.search import rank_chunks

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n---\n\n"


class RetrievalService:
    """Lexical retrieval over stored chunks.

    Args:
        max_results: Default hit limit. Defaults to settings.DEFAULT_MAX_RESULTS.
        context_max_sources: Hits included in a context block.
            Defaults to settings.CONTEXT_MAX_SOURCES.
    """

    def __init__(
        self,
        max_results: int | None = None,
        context_max_sources: int | None = None,
    ) -> None:
        self._max_results = max_results or settings.DEFAULT_MAX_RESULTS
        self._context_max_sources = context_max_sources or settings.CONTEXT_MAX_SOURCES

    async def search(
        self,
        query: str,
        session: AsyncSession,
        max_results: int | None = None,
        categories: Sequence[str] | None = None,
        exclude_legacy: bool = False,
        document_id: uuid.UUID | None = None,
    ) -> SearchResult:
        """Rank stored chunks against a query.

        Args:
            query: Free-text query.
            session: Async DB session.
            max_results: Hit limit; defaults to the service default.
            categories: Restrict to documents in these categories.
            exclude_legacy: Skip documents flagged as legacy data.
            document_id: Restrict to one document.

        Returns:
            SearchResult with hits ordered by descending score.
        """
        repo = ChunkRepository(session)
        candidates = await repo.list_for_search(
            categories=categories,
            exclude_legacy=exclude_legacy,
            document_id=document_id,
        )

        limit = max_results or self._max_results
        ranked = rank_chunks(candidates, query)
        hits = ranked[:limit] if limit > 0 else []

        logger.info(
            "Search %r: %d matches, %d returned from %d candidates",
            query,
            len(ranked),
            len(hits),
            len(candidates),
        )
        return SearchResult(
            query=query,
            hits=[self._to_hit(hit.chunk, hit.score) for hit in hits],
            total_candidates=len(candidates),
            total_matches=len(ranked),
        )

    async def get_context(
        self,
        query: str,
        session: AsyncSession,
        max_results: int | None = None,
        categories: Sequence[str] | None = None,
        exclude_legacy: bool = False,
        document_id: uuid.UUID | None = None,
    ) -> ContextResult:
        """Build a context block from the best matching chunks.

        Each block reads ``[Source n: filename]`` followed by the chunk text;
        blocks are separated by ``---`` rules. At most
        ``context_max_sources`` blocks are included.

        Args:
            query: Free-text query.
            session: Async DB session.
            max_results: Hit limit before truncation to the context size.
            categories: Restrict to documents in these categories.
            exclude_legacy: Skip documents flagged as legacy data.
            document_id: Restrict to one document.

        Returns:
            ContextResult with total_results counting every matching chunk;
            empty with found_relevant_content=False when no chunk matched.
        """
        result = await self.search(
            query,
            session,
            max_results=max_results,
            categories=categories,
            exclude_legacy=exclude_legacy,
            document_id=document_id,
        )
        if not result.hits:
            return ContextResult()

        top_hits = result.hits[: self._context_max_sources]
        context = CONTEXT_SEPARATOR.join(
            f"[Source {number}: {hit.filename}]\n{hit.content}"
            for number, hit in enumerate(top_hits, start=1)
        )
        sources = [
            ContextSource(
                filename=hit.filename,
                category=hit.category,
                chunk_index=hit.chunk_index,
                relevance_score=hit.relevance_score,
            )
            for hit in top_hits
        ]
        return ContextResult(
            context=context,
            sources=sources,
            found_relevant_content=True,
            total_results=result.total_matches,
        )

    @staticmethod
    def _to_hit(chunk: Chunk, score: int) -> SearchHit:
        return SearchHit(
            document_id=chunk.document_id,
            filename=chunk.document.filename,
            category=chunk.document.category,
            chunk_index=chunk.chunk_index,
            content=chunk.content,
            section_title=chunk.section_title,
            relevance_score=score,
        )
