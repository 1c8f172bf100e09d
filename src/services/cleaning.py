"""
Text Cleaning

Two whitespace normalizers for extracted document text:

    - clean_for_chunking: keeps paragraph breaks ("\\n\\n") so the chunker can
      find paragraph and heading boundaries.
    - flatten_text: collapses every whitespace run to a single space, for
      summaries and other short display strings.

They are not interchangeable: flattening before chunking loses the paragraph
structure the chunker relies on.
"""

import re

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_INLINE_WHITESPACE_RE = re.compile(r"[^\S\n]+")
_SPACES_AROUND_NEWLINE_RE = re.compile(r" ?\n ?")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

SUMMARY_MAX_LENGTH = 300
SUMMARY_TOO_SHORT = "Document content too short for summary generation."


def clean_for_chunking(text: str) -> str:
    """Normalize whitespace while preserving paragraph breaks.

    Line endings become ``\\n``, control characters are removed, inline
    whitespace runs become one space, spaces next to newlines are dropped and
    three or more newlines collapse to a blank line. The result is trimmed.

    Args:
        text: Raw extracted text.

    Returns:
        Cleaned text. Idempotent; empty input yields an empty string.
    """
    if not text:
        return ""

    cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = _CONTROL_CHARS_RE.sub("", cleaned)
    cleaned = _INLINE_WHITESPACE_RE.sub(" ", cleaned)
    cleaned = _SPACES_AROUND_NEWLINE_RE.sub("\n", cleaned)
    cleaned = _EXCESS_NEWLINES_RE.sub("\n\n", cleaned)
    return cleaned.strip()


def flatten_text(text: str) -> str:
    """Collapse all whitespace, newlines included, to single spaces.

    Args:
        text: Raw extracted text.

    Returns:
        Single-line text. Idempotent; empty input yields an empty string.
    """
    if not text:
        return ""

    flattened = _CONTROL_CHARS_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", flattened).strip()


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens."""
    return len(text.split())


def summarize_text(text: str) -> str:
    """Build a short display summary from the leading sentences of a document.

    Args:
        text: Document text (cleaned or raw).

    Returns:
        Up to ``SUMMARY_MAX_LENGTH`` characters (plus ``...`` when truncated),
        or ``SUMMARY_TOO_SHORT`` for texts under 100 characters.
    """
    flat = flatten_text(text)
    if len(flat) < 100:
        return SUMMARY_TOO_SHORT

    sentences = [s for s in _SENTENCE_SPLIT_RE.split(flat) if len(s.strip()) > 20]
    lead = ". ".join(sentences[:3]).strip()
    if len(lead) > 50:
        return _truncate(lead)

    return _truncate(flat)


def _truncate(text: str) -> str:
    if len(text) > SUMMARY_MAX_LENGTH:
        return text[:SUMMARY_MAX_LENGTH] + "..."
    return text
