"""
Document Processing Service Unit Tests

Tests the DocumentProcessingService pipeline with mocked repositories.
No real DB; chunking and categorization run for real unless patched.
"""

import uuid
from unittest.mock import AsyncMock, MagicMock, call, patch

import pytest
from sqlalchemy.exc import OperationalError

from src.models.document import Document, DocumentStatus
from src.services.processing import (
    NO_TEXT_MESSAGE,
    DocumentProcessingError,
    DocumentProcessingService,
    EmptyDocumentError,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

POLICY_PARAGRAPH = (
    "Every employee is entitled to twenty days of paid vacation per year under this policy. "
    "Vacation requests follow the approval procedure described by human resources. "
) * 4


def _make_document(text: str | None = None, category: str | None = None) -> Document:
    """Create an unsaved Document with a fixed id."""
    return Document(
        id=uuid.uuid4(),
        filename="vacation-policy.txt",
        mime_type="text/plain",
        category=category,
        tags=[],
        is_legacy=False,
        status=DocumentStatus.UPLOADED,
        extracted_text=text,
    )


def _long_text() -> str:
    return "\n\n".join(POLICY_PARAGRAPH.strip() for _ in range(6))


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestDocumentProcessingService:
    """Tests for DocumentProcessingService.process()."""

    @pytest.fixture()
    def mock_session(self) -> AsyncMock:
        """Mock async DB session."""
        session = AsyncMock()
        session.commit = AsyncMock()
        session.rollback = AsyncMock()
        session.flush = AsyncMock()
        session.add = MagicMock()
        return session

    @pytest.fixture()
    def service(self) -> DocumentProcessingService:
        """Service with default chunker and categorizer."""
        return DocumentProcessingService()

    @pytest.mark.asyncio(loop_scope="session")
    async def test_process_success(
        self,
        service: DocumentProcessingService,
        mock_session: AsyncMock,
    ) -> None:
        """Full pipeline categorizes, summarizes, stores chunks and commits."""
        document = _make_document(_long_text())

        with (
            patch("src.services.processing.DocumentRepository") as MockDocRepo,
            patch("src.services.processing.ChunkRepository") as MockChunkRepo,
        ):
            doc_repo = MockDocRepo.return_value
            doc_repo.update_status = AsyncMock()
            chunk_repo = MockChunkRepo.return_value
            chunk_repo.replace_for_document = AsyncMock(return_value=[])

            result, num_chunks = await service.process(document, mock_session)

            assert result is document
            assert num_chunks > 1
            assert document.category == "policies_procedures"
            assert document.tags[0] == "policies procedures"
            assert document.summary

            stored_id, stored_chunks = chunk_repo.replace_for_document.call_args.args
            assert stored_id == document.id
            assert len(stored_chunks) == num_chunks
            assert [c.chunk_index for c in stored_chunks] == list(range(num_chunks))

            assert doc_repo.update_status.await_args_list == [
                call(document, DocumentStatus.PROCESSING),
                call(document, DocumentStatus.PROCESSED),
            ]
            mock_session.commit.assert_awaited_once()
            mock_session.rollback.assert_not_awaited()

    @pytest.mark.asyncio(loop_scope="session")
    async def test_process_keeps_assigned_category(
        self,
        service: DocumentProcessingService,
        mock_session: AsyncMock,
    ) -> None:
        """A category chosen at upload is not overwritten."""
        document = _make_document(_long_text(), category="training_materials")

        with (
            patch("src.services.processing.DocumentRepository") as MockDocRepo,
            patch("src.services.processing.ChunkRepository") as MockChunkRepo,
        ):
            MockDocRepo.return_value.update_status = AsyncMock()
            MockChunkRepo.return_value.replace_for_document = AsyncMock(return_value=[])

            await service.process(document, mock_session)

            assert document.category == "training_materials"
            assert document.tags == []

    @pytest.mark.asyncio(loop_scope="session")
    async def test_process_short_document_single_chunk(
        self,
        service: DocumentProcessingService,
        mock_session: AsyncMock,
    ) -> None:
        """A short text is stored as exactly one chunk."""
        document = _make_document("This is a short document for testing.")

        with (
            patch("src.services.processing.DocumentRepository") as MockDocRepo,
            patch("src.services.processing.ChunkRepository") as MockChunkRepo,
        ):
            MockDocRepo.return_value.update_status = AsyncMock()
            MockChunkRepo.return_value.replace_for_document = AsyncMock(return_value=[])

            _, num_chunks = await service.process(document, mock_session)

            assert num_chunks == 1

    @pytest.mark.asyncio(loop_scope="session")
    @pytest.mark.parametrize("text", [None, "", "   \n\n  "])
    async def test_process_empty_text_raises(
        self,
        service: DocumentProcessingService,
        mock_session: AsyncMock,
        text: str | None,
    ) -> None:
        """Documents without text end in ERROR and no chunks are written."""
        document = _make_document(text)

        with (
            patch("src.services.processing.DocumentRepository") as MockDocRepo,
            patch("src.services.processing.ChunkRepository") as MockChunkRepo,
        ):
            doc_repo = MockDocRepo.return_value
            doc_repo.update_status = AsyncMock()
            chunk_repo = MockChunkRepo.return_value
            chunk_repo.replace_for_document = AsyncMock()

            with pytest.raises(EmptyDocumentError, match=NO_TEXT_MESSAGE) as exc_info:
                await service.process(document, mock_session)

            assert exc_info.value.document_id == document.id
            doc_repo.update_status.assert_awaited_with(
                document, DocumentStatus.ERROR, NO_TEXT_MESSAGE
            )
            chunk_repo.replace_for_document.assert_not_awaited()
            mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio(loop_scope="session")
    async def test_process_no_chunks_produced(self, mock_session: AsyncMock) -> None:
        """Zero chunks after filtering still marks the document PROCESSED."""
        chunker = MagicMock()
        chunker.chunk_document.return_value = []
        service = DocumentProcessingService(chunker=chunker)
        document = _make_document(_long_text())

        with (
            patch("src.services.processing.DocumentRepository") as MockDocRepo,
            patch("src.services.processing.ChunkRepository") as MockChunkRepo,
        ):
            doc_repo = MockDocRepo.return_value
            doc_repo.update_status = AsyncMock()
            chunk_repo = MockChunkRepo.return_value
            chunk_repo.replace_for_document = AsyncMock(return_value=[])

            _, num_chunks = await service.process(document, mock_session)

            assert num_chunks == 0
            chunk_repo.replace_for_document.assert_awaited_once_with(document.id, [])
            doc_repo.update_status.assert_awaited_with(document, DocumentStatus.PROCESSED)

    @pytest.mark.asyncio(loop_scope="session")
    async def test_process_storage_failure(
        self,
        service: DocumentProcessingService,
        mock_session: AsyncMock,
    ) -> None:
        """A database error rolls back, records ERROR and raises."""
        document = _make_document(_long_text())
        db_error = OperationalError("INSERT INTO chunks", {}, Exception("connection lost"))

        with (
            patch("src.services.processing.DocumentRepository") as MockDocRepo,
            patch("src.services.processing.ChunkRepository") as MockChunkRepo,
        ):
            doc_repo = MockDocRepo.return_value
            doc_repo.update_status = AsyncMock()
            doc_repo.mark_error = AsyncMock()
            MockChunkRepo.return_value.replace_for_document = AsyncMock(side_effect=db_error)

            with pytest.raises(DocumentProcessingError, match="Failed to store chunks"):
                await service.process(document, mock_session)

            mock_session.rollback.assert_awaited_once()
            doc_repo.mark_error.assert_awaited_once()
            assert doc_repo.mark_error.await_args.args[0] == document.id
            mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio(loop_scope="session")
    async def test_process_unexpected_error_propagates(self, mock_session: AsyncMock) -> None:
        """Non-storage exceptions are not converted or recorded as ERROR."""
        chunker = MagicMock()
        chunker.chunk_document.side_effect = RuntimeError("chunker bug")
        service = DocumentProcessingService(chunker=chunker)
        document = _make_document(_long_text())

        with (
            patch("src.services.processing.DocumentRepository") as MockDocRepo,
            patch("src.services.processing.ChunkRepository"),
        ):
            doc_repo = MockDocRepo.return_value
            doc_repo.update_status = AsyncMock()
            doc_repo.mark_error = AsyncMock()

            with pytest.raises(RuntimeError, match="chunker bug"):
                await service.process(document, mock_session)

            doc_repo.mark_error.assert_not_awaited()
            mock_session.rollback.assert_not_awaited()
            mock_session.commit.assert_not_awaited()


class TestProcessingErrors:
    """Tests for the processing exception types."""

    def test_empty_document_error_is_processing_error(self) -> None:
        """EmptyDocumentError can be caught as DocumentProcessingError."""
        document_id = uuid.uuid4()
        error = EmptyDocumentError(document_id)

        assert isinstance(error, DocumentProcessingError)
        assert error.document_id == document_id
        assert str(document_id) in str(error)
