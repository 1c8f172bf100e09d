"""
Lexical Search

Ranks chunks by literal substring matches against a free-text query:
an exact-phrase bonus plus per-term occurrence counts. There is no TF-IDF
normalization and no semantic similarity; callers rely on this low bar for
"relevant".
"""

import re
from collections.abc import Sequence
from typing import Generic, NamedTuple, Protocol, TypeVar

EXACT_PHRASE_BONUS = 10
MIN_TERM_LENGTH = 3

STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
        "with", "by", "how", "what", "where", "when", "why", "which", "who", "can",
        "could", "would", "should", "this", "that", "these", "those", "tell", "me",
        "about", "is", "are", "was", "were", "do", "does", "did", "will", "have",
        "has", "had",
    }
)  # fmt: skip

_PUNCTUATION_RE = re.compile(r"[^\w\s]")


class HasContent(Protocol):
    """Anything with chunk text: ORM Chunk rows or ChunkData."""

    content: str


ChunkT = TypeVar("ChunkT", bound=HasContent)


class ScoredChunk(NamedTuple, Generic[ChunkT]):
    """A search hit: the chunk as passed in and its positive score."""

    chunk: ChunkT
    score: int


def tokenize_query(query: str) -> list[str]:
    """Split a query into search terms.

    Lowercases, replaces punctuation with spaces, and drops terms shorter
    than 3 characters and stop words. When nothing survives, the whole
    lowercased query becomes the only term.

    Args:
        query: Free-text query.

    Returns:
        Terms in query order (duplicates kept). Empty only for a blank query.
    """
    lowered = query.lower()
    words = _PUNCTUATION_RE.sub(" ", lowered).split()
    terms = [w for w in words if len(w) >= MIN_TERM_LENGTH and w not in STOP_WORDS]
    if terms:
        return terms

    fallback = lowered.strip()
    return [fallback] if fallback else []


def score_content(content: str, query: str, terms: Sequence[str] | None = None) -> int:
    """Score one chunk text against a query.

    Args:
        content: Chunk text.
        query: Free-text query.
        terms: Pre-tokenized terms; computed from ``query`` when omitted.

    Returns:
        EXACT_PHRASE_BONUS when the whole query occurs in the content, plus
        the number of (non-overlapping) occurrences of every term.
    """
    if terms is None:
        terms = tokenize_query(query)

    haystack = content.lower()
    phrase = query.lower().strip()

    score = EXACT_PHRASE_BONUS if phrase and phrase in haystack else 0
    for term in terms:
        score += haystack.count(term)
    return score


def rank_chunks(chunks: Sequence[ChunkT], query: str) -> list[ScoredChunk[ChunkT]]:
    """Score every chunk and return all matches, highest score first.

    Chunks scoring 0 are excluded. The sort is stable, so equal scores keep
    the order of ``chunks``.

    Args:
        chunks: Candidate chunks, each with a ``content`` attribute.
        query: Free-text query.

    Returns:
        Every matching chunk with its score; empty for a blank query.
    """
    terms = tokenize_query(query)
    if not terms:
        return []

    hits: list[ScoredChunk[ChunkT]] = []
    for chunk in chunks:
        score = score_content(chunk.content, query, terms)
        if score > 0:
            hits.append(ScoredChunk(chunk, score))

    hits.sort(key=lambda hit: hit.score, reverse=True)
    return hits


def search_chunks(
    chunks: Sequence[ChunkT],
    query: str,
    max_results: int = 5,
) -> list[ScoredChunk[ChunkT]]:
    """Rank chunks by lexical relevance to ``query``.

    Args:
        chunks: Candidate chunks, each with a ``content`` attribute.
        query: Free-text query.
        max_results: Maximum number of hits returned.

    Returns:
        Up to ``max_results`` hits from ``rank_chunks``.
    """
    if max_results <= 0:
        return []
    return rank_chunks(chunks, query)[:max_results]
