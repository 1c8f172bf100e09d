"""
Search Router

Endpoints for lexical chunk search and chat context assembly.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.schemas.search import ContextResult, SearchRequest, SearchResult
from src.services.retrieval import RetrievalService

router = APIRouter(prefix="/api/v1/search")


@router.post("", response_model=SearchResult)
async def search(
    request: SearchRequest,
    session: AsyncSession = Depends(get_db),
) -> SearchResult:
    """Rank stored chunks against a free-text query.

    Args:
        request: Query, result limit and document filters.
        session: Database session (injected).

    Returns:
        SearchResult with hits ordered by descending relevance score.
    """
    return await RetrievalService().search(
        request.query,
        session,
        max_results=request.max_results,
        categories=request.categories,
        exclude_legacy=request.exclude_legacy,
        document_id=request.document_id,
    )


@router.post("/context", response_model=ContextResult)
async def search_context(
    request: SearchRequest,
    session: AsyncSession = Depends(get_db),
) -> ContextResult:
    """Assemble a source-labelled context block for a chat query."""
    return await RetrievalService().get_context(
        request.query,
        session,
        max_results=request.max_results,
        categories=request.categories,
        exclude_legacy=request.exclude_legacy,
        document_id=request.document_id,
    )
