"""
Chunk Post-Processing

Drops degenerate chunk candidates (too short, repetitive, URL-dominated) and
assigns the final contiguous chunk indexes. Surviving content is never
modified.
"""

import logging
import re
import uuid
from collections.abc import Sequence

from src.core.config import settings
from src.schemas.chunking import ChunkData, RawChunk
from src.services.cleaning import count_words

logger = logging.getLogger(__name__)

_URL_RE = re.compile(r"https?://\S+")


class ChunkPostProcessor:
    """Filters raw chunks and re-indexes the survivors.

    Args:
        min_length: Chunks shorter than this are dropped.
            Defaults to settings.MIN_CHUNK_LENGTH.
        min_unique_chars: A chunk longer than ``repetitive_min_length`` with
            fewer distinct characters than this is dropped as repetitive.
            Defaults to settings.REPETITIVE_MIN_UNIQUE_CHARS.
        repetitive_min_length: Length above which the repetition check applies.
            Defaults to settings.REPETITIVE_MIN_LENGTH.
        max_url_ratio: Chunks whose URLs cover more than this share of
            characters are dropped. Defaults to settings.MAX_URL_RATIO.
    """

    def __init__(
        self,
        min_length: int | None = None,
        min_unique_chars: int | None = None,
        repetitive_min_length: int | None = None,
        max_url_ratio: float | None = None,
    ) -> None:
        self._min_length = min_length if min_length is not None else settings.MIN_CHUNK_LENGTH
        self._min_unique_chars = (
            min_unique_chars
            if min_unique_chars is not None
            else settings.REPETITIVE_MIN_UNIQUE_CHARS
        )
        self._repetitive_min_length = (
            repetitive_min_length
            if repetitive_min_length is not None
            else settings.REPETITIVE_MIN_LENGTH
        )
        self._max_url_ratio = max_url_ratio if max_url_ratio is not None else settings.MAX_URL_RATIO

    def process(
        self,
        raw_chunks: Sequence[RawChunk],
        document_id: uuid.UUID | None = None,
    ) -> list[ChunkData]:
        """Filter degenerate chunks and number the rest from 0.

        Args:
            raw_chunks: Chunk candidates in document order.
            document_id: Owning document, copied onto every chunk.

        Returns:
            Surviving chunks with contiguous chunk_index values.
        """
        chunks: list[ChunkData] = []
        for position, raw in enumerate(raw_chunks):
            reason = self.drop_reason(raw.content)
            if reason is not None:
                logger.debug("Dropping chunk candidate %d (%s)", position, reason)
                continue

            chunks.append(
                ChunkData(
                    document_id=document_id,
                    chunk_index=len(chunks),
                    content=raw.content,
                    word_count=count_words(raw.content),
                    start_position=raw.start_offset,
                    end_position=raw.end_offset,
                    section_title=raw.section_title,
                )
            )

        if len(chunks) < len(raw_chunks):
            logger.debug("Kept %d of %d chunk candidates", len(chunks), len(raw_chunks))
        return chunks

    def drop_reason(self, content: str) -> str | None:
        """Return why ``content`` should be dropped, or None to keep it."""
        if len(content) < self._min_length:
            return "too short"
        if self.is_repetitive(content):
            return "repetitive"
        if self.url_ratio(content) > self._max_url_ratio:
            return "url-heavy"
        return None

    def is_repetitive(self, content: str) -> bool:
        """True for long content built from very few distinct characters."""
        if len(content) <= self._repetitive_min_length:
            return False
        unique_chars = {char for char in content.lower() if not char.isspace()}
        return len(unique_chars) < self._min_unique_chars

    @staticmethod
    def url_ratio(content: str) -> float:
        """Share of characters covered by http(s) URLs."""
        if not content:
            return 0.0
        url_chars = sum(len(match.group()) for match in _URL_RE.finditer(content))
        return url_chars / len(content)
