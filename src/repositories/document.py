"""
Document Repository

Database access layer for document CRUD operations.
All SQL operations go through this repository, never in services or routers.
"""

import logging
import uuid
from collections import Counter

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.models.document import Document, DocumentStatus

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Repository for Document CRUD operations.

    Args:
        session: Async SQLAlchemy session (injected per request).
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, document: Document) -> Document:
        """Insert a new document.

        Args:
            document: Document ORM instance to persist.

        Returns:
            The persisted Document, tracked by the session.
        """
        self._session.add(document)
        await self._session.flush()
        logger.info("Created document %s (%s)", document.id, document.filename)
        return document

    async def get_by_id(self, document_id: uuid.UUID) -> Document | None:
        """Fetch a document by ID with its chunks eagerly loaded.

        Args:
            document_id: UUID of the document.

        Returns:
            Document if found, None otherwise.
        """
        stmt = (
            select(Document)
            .where(Document.id == document_id)
            .options(selectinload(Document.chunks))
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(self, category: str | None = None) -> list[Document]:
        """Fetch documents ordered by creation date (newest first).

        Args:
            category: Optional category filter.

        Returns:
            List of Document objects.
        """
        stmt = select(Document).options(selectinload(Document.chunks))
        if category is not None:
            stmt = stmt.where(Document.category == category)
        stmt = stmt.order_by(Document.created_at.desc())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def update_status(
        self,
        document: Document,
        status: DocumentStatus,
        error_message: str | None = None,
    ) -> None:
        """Move a document to a new processing status.

        Args:
            document: Tracked Document instance.
            status: New status.
            error_message: Stored for ERROR, cleared otherwise.
        """
        document.status = status
        document.error_message = error_message
        await self._session.flush()
        logger.info("Updated document %s status=%s", document.id, status)

    async def mark_error(self, document_id: uuid.UUID, error_message: str) -> None:
        """Set ERROR status by ID, without needing a loaded instance.

        Used after a rollback, when tracked instances are expired.

        Args:
            document_id: UUID of the document.
            error_message: Failure description to store.
        """
        stmt = (
            update(Document)
            .where(Document.id == document_id)
            .values(status=DocumentStatus.ERROR, error_message=error_message)
        )
        await self._session.execute(stmt)
        logger.info("Marked document %s as ERROR", document_id)

    async def delete(self, document: Document) -> None:
        """Delete a document; its chunks cascade.

        Args:
            document: Tracked Document instance.
        """
        await self._session.delete(document)
        await self._session.flush()
        logger.info("Deleted document %s", document.id)

    async def count_by_status(self) -> dict[str, int]:
        """Count documents per processing status.

        Returns:
            Mapping of status name to document count; statuses with no
            documents are omitted.
        """
        stmt = select(Document.status, func.count()).group_by(Document.status)
        result = await self._session.execute(stmt)
        return {str(status): count for status, count in result.all()}

    @staticmethod
    def get_category_counts(documents: list[Document]) -> Counter[str]:
        """Count documents per category (uncategorized ones are skipped).

        Args:
            documents: Documents to tally.

        Returns:
            Counter mapping category name to document count.
        """
        return Counter(doc.category for doc in documents if doc.category)
