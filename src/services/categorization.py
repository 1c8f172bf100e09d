"""
Document Categorization

Pattern-based categorization of HR documents into a fixed set of categories,
plus frequency-based tag generation. Everything runs locally; there is no
model call.
"""

import logging
import re
from collections import Counter
from typing import NamedTuple

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

METHOD_PATTERN = "pattern-based"
MAX_TAGS = 10
MAX_FREQUENT_WORD_TAGS = 5

_WORD_RE = re.compile(r"\b\w{4,}\b")

_COMMON_WORDS: frozenset[str] = frozenset(
    {
        "this", "that", "with", "have", "will", "from", "they", "been", "said",
        "each", "which", "their", "time", "would", "there", "could", "other",
    }
)  # fmt: skip


class CategoryRule(NamedTuple):
    """Scoring rule for one category."""

    name: str
    description: str
    keywords: tuple[str, ...]
    pattern: re.Pattern[str]


# Ordered; the last rule wins score ties.
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        "policies_procedures",
        "Company policies and procedures",
        ("policy", "procedure", "guideline", "rule", "regulation", "compliance", "code of conduct"),
        re.compile(
            r"\b(policy|procedure|guideline|regulation|compliance|code of conduct"
            r"|standard operating|SOP)\b",
            re.IGNORECASE,
        ),
    ),
    CategoryRule(
        "job_frameworks",
        "Job descriptions and frameworks",
        ("job description", "role", "responsibilities", "requirements", "qualifications", "position"),
        re.compile(
            r"\b(job description|role|position|responsibilities|qualifications|requirements|JD)\b",
            re.IGNORECASE,
        ),
    ),
    CategoryRule(
        "training_materials",
        "Training and learning resources",
        ("training", "course", "learning", "education", "skill", "development", "tutorial"),
        re.compile(
            r"\b(training|course|learning|education|skill development|tutorial|workshop)\b",
            re.IGNORECASE,
        ),
    ),
    CategoryRule(
        "compliance_documents",
        "Compliance and regulatory documents",
        ("compliance", "legal", "regulation", "audit", "certification", "standard"),
        re.compile(
            r"\b(compliance|legal|regulation|audit|certification|ISO|standard)\b",
            re.IGNORECASE,
        ),
    ),
    CategoryRule(
        "legacy_assessment_data",
        "Historical assessment information",
        ("assessment", "evaluation", "performance", "review", "appraisal", "historic", "legacy"),
        re.compile(
            r"\b(assessment|evaluation|performance review|appraisal|legacy|historic|past)\b",
            re.IGNORECASE,
        ),
    ),
    CategoryRule(
        "legacy_survey_data",
        "Historical survey data",
        ("survey", "questionnaire", "feedback", "response", "poll", "historic", "legacy"),
        re.compile(
            r"\b(survey|questionnaire|feedback|poll|legacy|historic|past data)\b",
            re.IGNORECASE,
        ),
    ),
    CategoryRule(
        "organizational_guidelines",
        "Organizational guidelines and standards",
        ("organization", "structure", "hierarchy", "process", "workflow", "guideline"),
        re.compile(
            r"\b(organizational|structure|hierarchy|workflow|process|guideline)\b",
            re.IGNORECASE,
        ),
    ),
)

CATEGORY_NAMES: tuple[str, ...] = tuple(rule.name for rule in CATEGORY_RULES)


class CategorizationResult(BaseModel):
    """Outcome of categorizing one document.

    Attributes:
        category: Best matching category name.
        confidence: max_score / 10, capped at 1.0.
        method: How the category was chosen.
        scores: Raw score per category.
        reasoning: Human-readable explanation.
        tags: Category tag followed by frequent content words.
    """

    category: str
    confidence: float
    method: str = METHOD_PATTERN
    scores: dict[str, int] = Field(default_factory=dict)
    reasoning: str = ""
    tags: list[str] = Field(default_factory=list)


class DocumentCategorizer:
    """Scores document text and filename against CATEGORY_RULES."""

    def categorize(self, text: str, filename: str = "") -> CategorizationResult:
        """Pick the best category for a document and generate its tags.

        Args:
            text: Document text.
            filename: Original filename; keywords in it add to the score.

        Returns:
            CategorizationResult for the highest scoring category.
        """
        scores = self.score_categories(text, filename)

        best = CATEGORY_RULES[0].name
        for name in CATEGORY_NAMES:
            if scores[name] >= scores[best]:
                best = name

        max_score = scores[best]
        result = CategorizationResult(
            category=best,
            confidence=min(max_score / 10, 1.0),
            scores=scores,
            reasoning=f"Pattern matching found {max_score} indicators for {best}",
            tags=self.generate_tags(text, best),
        )
        logger.info(
            "Categorized %s as %s (confidence=%.2f)",
            filename or "document",
            result.category,
            result.confidence,
        )
        return result

    @staticmethod
    def score_categories(text: str, filename: str = "") -> dict[str, int]:
        """Score every category.

        Per category: 2 points per keyword occurrence in the lowercased text,
        3 per regex match, 5 per keyword contained in the lowercased filename.
        """
        text_lower = text.lower()
        filename_lower = filename.lower()

        scores: dict[str, int] = {}
        for rule in CATEGORY_RULES:
            score = 0
            for keyword in rule.keywords:
                score += text_lower.count(keyword) * 2
                if keyword in filename_lower:
                    score += 5
            score += len(rule.pattern.findall(text)) * 3
            scores[rule.name] = score
        return scores

    @staticmethod
    def generate_tags(text: str, category: str | None) -> list[str]:
        """Category tag plus the most frequent meaningful words.

        Words need at least 4 word characters, more than 2 occurrences, and
        must not be common filler words.
        """
        tags: list[str] = []
        if category:
            # Every underscore, not only the first.
            tags.append(category.replace("_", " "))

        frequencies = Counter(_WORD_RE.findall(text.lower()))
        frequent = [
            (word, count)
            for word, count in frequencies.most_common()
            if count > 2 and word not in _COMMON_WORDS
        ]
        for word, _ in frequent[:MAX_FREQUENT_WORD_TAGS]:
            if word not in tags:
                tags.append(word)

        return tags[:MAX_TAGS]
