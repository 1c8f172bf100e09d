"""
Health Check Router

Reports database connectivity and document processing counts.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.database import get_db
from src.repositories.document import DocumentRepository
from src.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(
    session: AsyncSession = Depends(get_db),
) -> HealthResponse:
    """Health check endpoint.

    Probes the database with ``SELECT 1`` and, when it answers, counts
    documents per status so stuck PROCESSING or ERROR documents are visible.

    Returns:
        HealthResponse: "ok" with counts, or "degraded" without them.
    """
    try:
        await session.execute(text("SELECT 1"))
        counts = await DocumentRepository(session).count_by_status()
    except (SQLAlchemyError, OSError):
        logger.warning("Database health check failed", exc_info=True)
        return HealthResponse(
            status="degraded",
            service=settings.PROJECT_NAME,
            database_available=False,
        )

    return HealthResponse(
        status="ok",
        service=settings.PROJECT_NAME,
        database_available=True,
        documents_by_status=counts,
    )
