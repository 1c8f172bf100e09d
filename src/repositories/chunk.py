"""
Chunk Repository

Database access layer for chunk storage and search candidate loading.
All SQL operations go through this repository, never in services or routers.
"""

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from src.models.chunk import Chunk
from src.models.document import Document, DocumentStatus
from src.schemas.chunking import ChunkData

logger = logging.getLogger(__name__)


class ChunkRepository:
    """Repository for Chunk persistence and candidate queries.

    Args:
        session: Async SQLAlchemy session (injected per request).
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_many(self, chunks: list[Chunk]) -> list[Chunk]:
        """Bulk-insert chunks into the database.

        Args:
            chunks: List of Chunk ORM instances to persist.

        Returns:
            The same list, now tracked by the session.
        """
        self._session.add_all(chunks)
        await self._session.flush()
        logger.info("Inserted %d chunks", len(chunks))
        return chunks

    async def get_by_document_id(self, document_id: uuid.UUID) -> list[Chunk]:
        """Fetch all chunks belonging to a document.

        Args:
            document_id: UUID of the parent document.

        Returns:
            List of Chunk objects ordered by chunk_index.
        """
        stmt = select(Chunk).where(Chunk.document_id == document_id).order_by(Chunk.chunk_index)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_document_id(self, document_id: uuid.UUID) -> int:
        """Delete all chunks for a document.

        Args:
            document_id: UUID of the parent document.

        Returns:
            Number of rows deleted.
        """
        stmt = delete(Chunk).where(Chunk.document_id == document_id)
        cursor = await self._session.execute(stmt)
        count = int(cursor.rowcount)  # type: ignore[attr-defined]
        logger.info("Deleted %d chunks for document %s", count, document_id)
        return count

    async def replace_for_document(
        self, document_id: uuid.UUID, chunks: Sequence[ChunkData]
    ) -> list[Chunk]:
        """Discard a document's chunks and store a freshly generated set.

        Runs inside the caller's transaction, so readers never observe a
        partially replaced set once it is committed.

        Args:
            document_id: UUID of the parent document.
            chunks: Complete new chunk set in chunk_index order.

        Returns:
            Persisted Chunk ORM instances.
        """
        await self.delete_by_document_id(document_id)
        if not chunks:
            return []

        models = [
            Chunk(
                document_id=document_id,
                chunk_index=chunk.chunk_index,
                content=chunk.content,
                word_count=chunk.word_count,
                start_position=chunk.start_position,
                end_position=chunk.end_position,
                section_title=chunk.section_title,
            )
            for chunk in chunks
        ]
        return await self.create_many(models)

    async def list_for_search(
        self,
        categories: Sequence[str] | None = None,
        exclude_legacy: bool = False,
        document_id: uuid.UUID | None = None,
    ) -> list[Chunk]:
        """Load search candidates from processed documents.

        Filters only on document attributes; content matching is left to the
        lexical scorer.

        Args:
            categories: Restrict to documents in these categories.
            exclude_legacy: Skip documents flagged as legacy data.
            document_id: Restrict to a single document.

        Returns:
            Chunks with their document loaded, newest documents first and in
            chunk order within a document.
        """
        stmt = (
            select(Chunk)
            .join(Chunk.document)
            .options(contains_eager(Chunk.document))
            .where(Document.status == DocumentStatus.PROCESSED)
        )
        if categories:
            stmt = stmt.where(Document.category.in_(list(categories)))
        if exclude_legacy:
            stmt = stmt.where(Document.is_legacy.is_(False))
        if document_id is not None:
            stmt = stmt.where(Chunk.document_id == document_id)

        stmt = stmt.order_by(Document.created_at.desc(), Chunk.document_id, Chunk.chunk_index)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
