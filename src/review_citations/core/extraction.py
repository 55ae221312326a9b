"""Best-effort metadata extraction from review markdown."""

import math
import re
from typing import Callable, Iterable, Optional, TypeVar

from review_citations.core.entities import Category, Document, PaperId, ReviewRecord
from review_citations.core.identifiers import normalize

T = TypeVar("T")

FieldExtractor = Callable[[str], Optional[T]]

UNKNOWN_AUTHORS = "Unknown"

DEFAULT_TITLE_LABELS = ("Technical Review", "YRSN Comparison")
DEFAULT_PRIMARY_MARKER = "vs_yrsn"
DEFAULT_SECONDARY_MARKER = "techreview"

RELEVANCE_SCALE = 10

# Relevance patterns, most specific first
_RELEVANCE_PATTERNS = [
    re.compile(r"relevance[\s*_]*score[^\d\n]*?(\d+(?:\.\d+)?)\s*/\s*(\d+)", re.IGNORECASE),
    re.compile(r"relevance[^\d\n]*?(\d+(?:\.\d+)?)\s*/\s*(\d+)", re.IGNORECASE),
]
_ANY_HEADING = re.compile(r"^#{1,6}[ \t]+(.+?)[ \t]*$", re.MULTILINE)
_AUTHORS_PATTERNS = [
    re.compile(r"\*\*Authors\*\*:[ \t]*(.+)"),
    re.compile(r"\*\*Authors:\*\*[ \t]*(.+)"),
]
_PUBLISHED_PATTERNS = [
    re.compile(r"\*\*Published\*\*:[ \t]*(\d{4}-\d{2}-\d{2})"),
    re.compile(r"\*\*Published:\*\*[ \t]*(\d{4}-\d{2}-\d{2})"),
]


def first_match(extractors: Iterable[FieldExtractor[T]], text: str) -> Optional[T]:
    """Return the first non-empty value produced by the extractors, in order."""
    for extractor in extractors:
        value = extractor(text)
        if value is not None:
            return value
    return None


def scale_relevance(numerator: float, denominator: int) -> Optional[int]:
    """Rescale ``numerator/denominator`` to 0-10, rounding half up."""
    if denominator <= 0:
        return None
    if denominator == RELEVANCE_SCALE:
        value = numerator
    else:
        value = numerator * RELEVANCE_SCALE / denominator
    score = int(math.floor(value + 0.5))
    return max(0, min(RELEVANCE_SCALE, score))


def _relevance_extractor(pattern: re.Pattern) -> FieldExtractor[int]:
    def extract(text: str) -> Optional[int]:
        match = pattern.search(text)
        if not match:
            return None
        return scale_relevance(float(match.group(1)), int(match.group(2)))
    return extract


def _text_extractor(pattern: re.Pattern) -> FieldExtractor[str]:
    def extract(text: str) -> Optional[str]:
        match = pattern.search(text)
        if not match:
            return None
        value = match.group(1).strip()
        return value or None
    return extract


def _heading_extractor(pattern: re.Pattern) -> FieldExtractor[str]:
    def extract(text: str) -> Optional[str]:
        # Skip headings that are empty after stripping
        for match in pattern.finditer(text):
            value = match.group(1).strip()
            if value:
                return value
        return None
    return extract


class MetadataExtractor:
    """Extract review metadata with ordered, independent field extractors."""

    def __init__(
        self,
        title_labels: Iterable[str] = DEFAULT_TITLE_LABELS,
        primary_marker: str = DEFAULT_PRIMARY_MARKER,
        secondary_marker: str = DEFAULT_SECONDARY_MARKER,
    ) -> None:
        self.title_labels = list(title_labels)
        self.primary_marker = primary_marker
        self.secondary_marker = secondary_marker

        self.relevance_extractors = [_relevance_extractor(p) for p in _RELEVANCE_PATTERNS]
        self.title_extractors: list[FieldExtractor[str]] = []
        if self.title_labels:
            labels = "|".join(re.escape(label) for label in self.title_labels)
            labelled = re.compile(
                rf"^#{{1,6}}[ \t]*(?:{labels})[ \t]*:[ \t]*(.+?)[ \t]*$", re.MULTILINE
            )
            self.title_extractors.append(_heading_extractor(labelled))
        self.title_extractors.append(_heading_extractor(_ANY_HEADING))
        self.authors_extractors = [_text_extractor(p) for p in _AUTHORS_PATTERNS]
        self.published_extractors = [_text_extractor(p) for p in _PUBLISHED_PATTERNS]

    def classify(self, filename: str) -> Category:
        """Classify a review by the markers in its filename."""
        if self.primary_marker and self.primary_marker in filename:
            return Category.PRIMARY
        if self.secondary_marker and self.secondary_marker in filename:
            return Category.SECONDARY
        return Category.OTHER

    def extract(self, document: Document, paper_id: Optional[PaperId] = None) -> ReviewRecord:
        """Build a review record without citations. Never raises on malformed text."""
        if paper_id is None:
            paper_id = normalize(document.filename)
        text = document.content

        title = first_match(self.title_extractors, text) or f"Paper {paper_id.canonical}"
        authors = first_match(self.authors_extractors, text) or UNKNOWN_AUTHORS

        return ReviewRecord(
            filename=document.filename,
            paper_id=paper_id,
            title=title,
            authors=authors,
            published_date=first_match(self.published_extractors, text),
            category=self.classify(document.filename),
            relevance_score=first_match(self.relevance_extractors, text),
            size_bytes=len(text.encode("utf-8")),
        )
