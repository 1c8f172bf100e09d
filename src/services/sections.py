"""
Section Identification

Splits cleaned document text into heading-delimited sections. Headings are
detected line by line with a fixed, ordered table of patterns; the order of
the table is also the tie-break when two kinds match the same line.
"""

import enum
import logging
import re
from typing import NamedTuple

from src.core.config import settings
from src.schemas.chunking import Section

logger = logging.getLogger(__name__)

DOCUMENT_HEADER = "Document"
PREAMBLE_HEADER = "Preamble"


class HeadingKind(enum.StrEnum):
    """Heading pattern kinds, plus the two synthetic section kinds."""

    MARKDOWN = "markdown"
    NUMBERED = "numbered"
    ALL_CAPS = "all_caps"
    TITLE_CASE = "title_case"
    PREAMBLE = "preamble"
    DOCUMENT = "document"


# Evaluated in this order; earlier entries win ties on the same offset.
HEADING_PATTERNS: tuple[tuple[HeadingKind, re.Pattern[str]], ...] = (
    (HeadingKind.MARKDOWN, re.compile(r"^#{1,6}[ \t]+(?P<title>[^\n]+)$", re.MULTILINE)),
    (HeadingKind.NUMBERED, re.compile(r"^\d+\.[ \t]+(?P<title>[^.\n]+)$", re.MULTILINE)),
    (
        HeadingKind.ALL_CAPS,
        re.compile(
            r"^(?=(?:[^A-Z\n]*[A-Z]){4})(?P<title>[A-Z][A-Z0-9 &/,()'\-]*):?$",
            re.MULTILINE,
        ),
    ),
    (
        HeadingKind.TITLE_CASE,
        re.compile(
            r"^(?P<title>[A-Z][a-z]+(?:[ \t]+(?:[A-Z][a-z]*|of|and|the|for|to|in|on|&)){0,7}):?$",
            re.MULTILINE,
        ),
    ),
)

_PRIORITY = {kind: rank for rank, (kind, _) in enumerate(HEADING_PATTERNS)}


class HeadingMatch(NamedTuple):
    """A detected heading line."""

    offset: int
    kind: HeadingKind
    title: str


def find_headings(text: str) -> list[HeadingMatch]:
    """Find heading lines, one per offset, sorted by position.

    Args:
        text: Cleaned document text.

    Returns:
        Heading matches ordered by offset. When several kinds match the same
        line, the kind listed first in ``HEADING_PATTERNS`` is kept.
    """
    by_offset: dict[int, HeadingMatch] = {}
    for kind, pattern in HEADING_PATTERNS:
        for match in pattern.finditer(text):
            offset = match.start()
            current = by_offset.get(offset)
            if current is None or _PRIORITY[kind] < _PRIORITY[current.kind]:
                by_offset[offset] = HeadingMatch(offset, kind, match.group("title").strip())
    return [by_offset[offset] for offset in sorted(by_offset)]


def identify_sections(text: str, min_section_length: int | None = None) -> list[Section]:
    """Split text into sections starting at each detected heading.

    Args:
        text: Cleaned document text.
        min_section_length: Sections whose stripped content is shorter than
            this are dropped. Defaults to settings.MIN_SECTION_LENGTH.

    Returns:
        Sections in document order. A single "Document" section wraps the
        whole text when no heading is found.
    """
    floor = min_section_length if min_section_length is not None else settings.MIN_SECTION_LENGTH

    if not text.strip():
        return []

    headings = find_headings(text)
    if not headings:
        return [
            Section(header=DOCUMENT_HEADER, content=text, kind=HeadingKind.DOCUMENT, start_offset=0)
        ]

    candidates: list[Section] = []

    preamble = text[: headings[0].offset]
    if preamble.strip():
        candidates.append(
            Section(
                header=PREAMBLE_HEADER,
                content=preamble.rstrip(),
                kind=HeadingKind.PREAMBLE,
                start_offset=0,
            )
        )

    for position, heading in enumerate(headings):
        end = headings[position + 1].offset if position + 1 < len(headings) else len(text)
        candidates.append(
            Section(
                header=heading.title.rstrip(":").strip(),
                content=text[heading.offset : end].rstrip(),
                kind=heading.kind,
                start_offset=heading.offset,
            )
        )

    sections = [s for s in candidates if len(s.content.strip()) >= floor]
    if len(sections) < len(candidates):
        logger.debug("Dropped %d sections below %d chars", len(candidates) - len(sections), floor)
    return sections
