"""
Paragraph Chunking

Splits cleaned document text into overlapping, paragraph-aligned chunks.
Long documents are first split into heading-delimited sections; each section
is packed into ~CHUNK_SIZE character windows, and the tail of every closed
window is carried into the next one as overlap.
"""

import logging
import re
import uuid
from collections.abc import Iterator

from src.core.config import settings
from src.schemas.chunking import ChunkData, RawChunk
from src.services.cleaning import clean_for_chunking, count_words
from src.services.post_processing import ChunkPostProcessor
from src.services.sections import identify_sections

logger = logging.getLogger(__name__)

_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")

PARAGRAPH_SEPARATOR = "\n\n"


def iter_paragraphs(text: str) -> Iterator[tuple[int, int, str]]:
    """Yield ``(start, end, paragraph)`` for every non-blank paragraph.

    Paragraphs are separated by one or more blank lines. Offsets point at the
    stripped paragraph inside ``text``.
    """
    position = 0
    for separator in _PARAGRAPH_BREAK_RE.finditer(text):
        yield from _stripped_span(text, position, separator.start())
        position = separator.end()
    yield from _stripped_span(text, position, len(text))


def _stripped_span(text: str, start: int, end: int) -> Iterator[tuple[int, int, str]]:
    raw = text[start:end]
    stripped = raw.strip()
    if stripped:
        lead = len(raw) - len(raw.lstrip())
        yield start + lead, start + lead + len(stripped), stripped


class DocumentChunker:
    """Splits document text into overlapping paragraph-aligned chunks.

    Instances hold configuration only, so one chunker can serve concurrent
    documents.

    Args:
        chunk_size: Target chunk size in characters. Defaults to settings.CHUNK_SIZE.
        chunk_overlap: Characters carried from one chunk into the next.
            Defaults to settings.CHUNK_OVERLAP.
        short_document_threshold: Cleaned documents shorter than this are
            emitted as one chunk. Defaults to settings.SHORT_DOCUMENT_THRESHOLD.
        min_paragraph_length: Shorter paragraphs are skipped as formatting
            noise. Defaults to settings.MIN_PARAGRAPH_LENGTH.
        post_processor: Degenerate-chunk filter. Defaults to a
            ChunkPostProcessor built from settings.
    """

    def __init__(
        self,
        chunk_size: int | None = None,
        chunk_overlap: int | None = None,
        short_document_threshold: int | None = None,
        min_paragraph_length: int | None = None,
        post_processor: ChunkPostProcessor | None = None,
    ) -> None:
        self._chunk_size = chunk_size if chunk_size is not None else settings.CHUNK_SIZE
        self._chunk_overlap = (
            chunk_overlap if chunk_overlap is not None else settings.CHUNK_OVERLAP
        )
        self._short_document_threshold = (
            short_document_threshold
            if short_document_threshold is not None
            else settings.SHORT_DOCUMENT_THRESHOLD
        )
        self._min_paragraph_length = (
            min_paragraph_length
            if min_paragraph_length is not None
            else settings.MIN_PARAGRAPH_LENGTH
        )
        self._post_processor = post_processor or ChunkPostProcessor()

        if self._chunk_size <= 0:
            raise ValueError(f"chunk_size ({self._chunk_size}) must be positive")
        if self._chunk_overlap < 0:
            raise ValueError(f"chunk_overlap ({self._chunk_overlap}) cannot be negative")
        if self._chunk_overlap >= self._chunk_size:
            raise ValueError(
                f"chunk_overlap ({self._chunk_overlap}) must be less than "
                f"chunk_size ({self._chunk_size})"
            )

    @property
    def chunk_size(self) -> int:
        """Target chunk size in characters."""
        return self._chunk_size

    @property
    def chunk_overlap(self) -> int:
        """Overlap between consecutive chunks in characters."""
        return self._chunk_overlap

    @property
    def short_document_threshold(self) -> int:
        """Cleaned length below which a document becomes a single chunk."""
        return self._short_document_threshold

    def chunk_document(
        self,
        text: str,
        document_id: uuid.UUID | None = None,
        filename: str = "",
    ) -> list[ChunkData]:
        """Clean, section, chunk and filter a document's text.

        Args:
            text: Raw extracted document text.
            document_id: Owning document, copied onto every chunk.
            filename: Used for log messages only.

        Returns:
            Chunks with contiguous chunk_index values starting at 0. Empty
            list when the text is blank or every chunk was filtered out.
        """
        cleaned = clean_for_chunking(text)
        if not cleaned:
            logger.warning("Empty text for %s, skipping", filename or document_id)
            return []

        if len(cleaned) < self._short_document_threshold:
            logger.info("Created 1 chunk for short document %s", filename or document_id)
            return [
                ChunkData(
                    document_id=document_id,
                    chunk_index=0,
                    content=cleaned,
                    word_count=count_words(cleaned),
                    start_position=0,
                    end_position=len(cleaned),
                )
            ]

        sections = identify_sections(cleaned)
        raw_chunks: list[RawChunk] = []
        for section in sections:
            for raw in self.chunk_text(section.content):
                raw_chunks.append(
                    RawChunk(
                        content=raw.content,
                        start_offset=section.start_offset + raw.start_offset,
                        end_offset=section.start_offset + raw.end_offset,
                        section_title=section.header,
                    )
                )

        chunks = self._post_processor.process(raw_chunks, document_id)

        logger.info(
            "Created %d chunks for %s (%d sections, %d raw, ~%d chars each, %d overlap)",
            len(chunks),
            filename or document_id,
            len(sections),
            len(raw_chunks),
            self._chunk_size,
            self._chunk_overlap,
        )
        return chunks

    def chunk_text(self, text: str) -> list[RawChunk]:
        """Pack paragraphs of ``text`` into overlapping windows.

        A window is closed when appending the next paragraph would push it
        past chunk_size. The next window starts with the overlap text of the
        closed one, so ``chunks[i + 1].content`` always begins with
        ``get_overlap_text(chunks[i].content, chunk_overlap)``.

        Args:
            text: Cleaned text (a section or a whole document).

        Returns:
            Raw chunks with offsets relative to ``text``.
        """
        chunks: list[RawChunk] = []
        buffer = ""
        buffer_start = 0
        buffer_end = 0

        for start, end, paragraph in iter_paragraphs(text):
            if len(paragraph) < self._min_paragraph_length:
                continue

            if buffer and len(buffer) + len(paragraph) > self._chunk_size:
                chunks.append(
                    RawChunk(content=buffer, start_offset=buffer_start, end_offset=buffer_end)
                )
                overlap = self.get_overlap_text(buffer, self._chunk_overlap)
                if overlap:
                    buffer = f"{overlap}{PARAGRAPH_SEPARATOR}{paragraph}"
                    buffer_start = max(buffer_start, buffer_end - len(overlap))
                else:
                    buffer = paragraph
                    buffer_start = start
            elif buffer:
                buffer = f"{buffer}{PARAGRAPH_SEPARATOR}{paragraph}"
            else:
                buffer = paragraph
                buffer_start = start
            buffer_end = end

        if buffer:
            chunks.append(RawChunk(content=buffer, start_offset=buffer_start, end_offset=buffer_end))

        return chunks

    @staticmethod
    def get_overlap_text(text: str, overlap_size: int) -> str:
        """Tail of ``text`` to repeat at the start of the next chunk.

        Takes the last ``overlap_size`` characters and backs up to just after
        the last sentence break (". ") when it lies in the second half of that
        window, otherwise to just after the last space, otherwise keeps the
        raw slice.

        Args:
            text: Content of the chunk being closed.
            overlap_size: Maximum overlap length in characters.

        Returns:
            Trimmed overlap text; empty when overlap_size is 0.
        """
        if overlap_size <= 0:
            return ""
        if len(text) <= overlap_size:
            return text.strip()

        tail = text[-overlap_size:]
        sentence_break = tail.rfind(". ")
        if sentence_break > overlap_size / 2:
            return tail[sentence_break + 2 :].strip()

        word_break = tail.rfind(" ")
        if word_break > 0:
            return tail[word_break + 1 :].strip()

        return tail.strip()
