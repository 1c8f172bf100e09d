"""
Document Processing Service

Orchestrates processing of one document's extracted text:
categorize → summarize → chunk → replace stored chunks → mark processed.
"""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.document import Document, DocumentStatus
from src.repositories.chunk import ChunkRepository
from src.repositories.document import DocumentRepository
from src.services.categorization import DocumentCategorizer
from src.services.chunking import DocumentChunker
from src.services.cleaning import summarize_text

logger = logging.getLogger(__name__)

NO_TEXT_MESSAGE = "No text content available for chunking"


class DocumentProcessingError(Exception):
    """Base exception for document processing failures."""

    def __init__(self, document_id: uuid.UUID, message: str) -> None:
        self.document_id = document_id
        super().__init__(message)


class EmptyDocumentError(DocumentProcessingError):
    """Raised when a document has no extracted text to chunk."""

    def __init__(self, document_id: uuid.UUID) -> None:
        super().__init__(document_id, f"{NO_TEXT_MESSAGE} (document {document_id})")


class DocumentProcessingService:
    """Turns a document's extracted text into a stored chunk set.

    Pipeline steps:
        1. Mark the document PROCESSING
        2. Reject documents without text (status ERROR)
        3. Categorize and tag, unless a category was already assigned
        4. Build the display summary
        5. Chunk the text
        6. Replace the document's stored chunks with the new set
        7. Mark the document PROCESSED and commit

    Reprocessing runs the same steps; the previous chunk set is discarded
    in the same transaction that stores the new one.

    Args:
        chunker: Chunker to use. Defaults to a settings-configured DocumentChunker.
        categorizer: Categorizer to use. Defaults to DocumentCategorizer().
    """

    def __init__(
        self,
        chunker: DocumentChunker | None = None,
        categorizer: DocumentCategorizer | None = None,
    ) -> None:
        self._chunker = chunker or DocumentChunker()
        self._categorizer = categorizer or DocumentCategorizer()

    async def process(self, document: Document, session: AsyncSession) -> tuple[Document, int]:
        """Run the processing pipeline for a persisted document.

        The document row must already be committed: on storage failure the
        transaction is rolled back and the ERROR status written separately.

        Args:
            document: Document with extracted_text set, tracked by ``session``.
            session: Async DB session for the transaction.

        Returns:
            Tuple of (Document, chunk_count). Zero chunks is a valid outcome
            (everything was filtered as noise) and is logged as a warning.

        Raises:
            EmptyDocumentError: If the document has no extracted text.
            DocumentProcessingError: If storing the results fails.
        """
        doc_repo = DocumentRepository(session)
        chunk_repo = ChunkRepository(session)
        document_id = document.id
        text = document.extracted_text or ""

        await doc_repo.update_status(document, DocumentStatus.PROCESSING)

        if not text.strip():
            logger.warning("No extracted text for %s (doc_id=%s)", document.filename, document_id)
            await doc_repo.update_status(document, DocumentStatus.ERROR, NO_TEXT_MESSAGE)
            await session.commit()
            raise EmptyDocumentError(document_id)

        try:
            if document.category is None:
                categorization = self._categorizer.categorize(text, document.filename)
                document.category = categorization.category
                document.tags = categorization.tags

            document.summary = summarize_text(text)

            chunks = self._chunker.chunk_document(text, document_id, document.filename)
            await chunk_repo.replace_for_document(document_id, chunks)

            if not chunks:
                logger.warning(
                    "No chunks produced for %s (doc_id=%s); text was filtered as noise",
                    document.filename,
                    document_id,
                )

            await doc_repo.update_status(document, DocumentStatus.PROCESSED)
            await session.commit()
        except SQLAlchemyError as exc:
            logger.error("Processing failed for doc_id=%s: %s", document_id, exc, exc_info=True)
            await session.rollback()
            await doc_repo.mark_error(document_id, str(exc))
            await session.commit()
            raise DocumentProcessingError(
                document_id, f"Failed to store chunks for document {document_id}: {exc}"
            ) from exc

        logger.info(
            "Processing complete: %s → %d chunks stored (doc_id=%s, category=%s)",
            document.filename,
            len(chunks),
            document_id,
            document.category,
        )
        return document, len(chunks)
