"""
Document Router

Endpoints for document submission, reprocessing, listing and chunk inspection.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database import get_db
from src.models.document import Document
from src.repositories.chunk import ChunkRepository
from src.repositories.document import DocumentRepository
from src.schemas.document import (
    CategoryResponse,
    ChunkListResponse,
    ChunkResponse,
    DocumentCreateRequest,
    DocumentListResponse,
    DocumentProcessResponse,
    DocumentResponse,
)
from src.services.categorization import CATEGORY_RULES
from src.services.processing import (
    DocumentProcessingError,
    DocumentProcessingService,
    EmptyDocumentError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1")


def _build_document_response(doc: Document) -> DocumentResponse:
    """Build a DocumentResponse from a Document with eagerly loaded chunks."""
    return DocumentResponse(
        id=doc.id,
        filename=doc.filename,
        mime_type=doc.mime_type,
        category=doc.category,
        tags=list(doc.tags or []),
        is_legacy=doc.is_legacy,
        status=str(doc.status),
        summary=doc.summary,
        error_message=doc.error_message,
        created_at=doc.created_at,
        num_chunks=len(doc.chunks),
    )


async def _run_processing(document: Document, session: AsyncSession) -> DocumentProcessResponse:
    """Process a committed document and map service errors to HTTP errors."""
    service = DocumentProcessingService()
    try:
        document, num_chunks = await service.process(document, session)
    except EmptyDocumentError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except DocumentProcessingError as exc:
        logger.error("Processing failed: %s", exc, exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    message = f"Processed {document.filename} ({num_chunks} chunks)"
    if num_chunks == 0:
        message += "; no usable text chunks were found"
    return DocumentProcessResponse(
        document_id=document.id,
        status=str(document.status),
        num_chunks=num_chunks,
        message=message,
    )


@router.post("/documents", response_model=DocumentProcessResponse, status_code=201)
async def create_document(
    request: DocumentCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> DocumentProcessResponse:
    """Store an extracted document and process it into chunks.

    Args:
        request: Filename, extracted text and optional category.
        session: Database session (injected).

    Returns:
        DocumentProcessResponse with the new document ID and chunk count.
    """
    repo = DocumentRepository(session)
    document = Document(
        filename=request.filename,
        mime_type=request.mime_type,
        category=request.category,
        is_legacy=request.is_legacy,
        extracted_text=request.text,
    )
    await repo.create(document)
    await session.commit()

    return await _run_processing(document, session)


@router.post("/documents/{document_id}/reprocess", response_model=DocumentProcessResponse)
async def reprocess_document(
    document_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
) -> DocumentProcessResponse:
    """Regenerate the full chunk set of a document from its stored text.

    Args:
        document_id: UUID of the document.
        session: Database session (injected).

    Returns:
        DocumentProcessResponse with the new chunk count.
    """
    repo = DocumentRepository(session)
    document = await repo.get_by_id(document_id)
    if document is None:
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found")

    return await _run_processing(document, session)


@router.get("/documents", response_model=DocumentListResponse)
async def list_documents(
    category: str | None = None,
    session: AsyncSession = Depends(get_db),
) -> DocumentListResponse:
    """List documents, optionally filtered by category.

    Args:
        category: Optional category filter.
        session: Database session (injected).

    Returns:
        DocumentListResponse with documents, total and per-category counts.
    """
    repo = DocumentRepository(session)
    documents = await repo.get_all(category=category)

    return DocumentListResponse(
        documents=[_build_document_response(doc) for doc in documents],
        total=len(documents),
        categories=dict(DocumentRepository.get_category_counts(documents)),
    )


@router.get("/documents/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
) -> DocumentResponse:
    """Get details for a specific document."""
    repo = DocumentRepository(session)
    document = await repo.get_by_id(document_id)

    if document is None:
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found")

    return _build_document_response(document)


@router.get("/documents/{document_id}/chunks", response_model=ChunkListResponse)
async def list_document_chunks(
    document_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
) -> ChunkListResponse:
    """List a document's chunks in chunk_index order."""
    doc_repo = DocumentRepository(session)
    if await doc_repo.get_by_id(document_id) is None:
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found")

    chunks = await ChunkRepository(session).get_by_document_id(document_id)
    return ChunkListResponse(
        document_id=document_id,
        chunks=[
            ChunkResponse(
                chunk_index=chunk.chunk_index,
                content=chunk.content,
                word_count=chunk.word_count,
                start_position=chunk.start_position,
                end_position=chunk.end_position,
                section_title=chunk.section_title,
            )
            for chunk in chunks
        ],
        total=len(chunks),
    )


@router.delete("/documents/{document_id}", status_code=204)
async def delete_document(
    document_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
) -> Response:
    """Delete a document and its chunks."""
    repo = DocumentRepository(session)
    document = await repo.get_by_id(document_id)
    if document is None:
        raise HTTPException(status_code=404, detail=f"Document {document_id} not found")

    await repo.delete(document)
    await session.commit()
    return Response(status_code=204)


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    """List the fixed document categories."""
    return [
        CategoryResponse(name=rule.name, description=rule.description, keywords=list(rule.keywords))
        for rule in CATEGORY_RULES
    ]
