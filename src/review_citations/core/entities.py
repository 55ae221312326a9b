"""Core domain entities."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class Category(str, Enum):
    """Classification of a review document."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    OTHER = "other"


class CitationStatus(str, Enum):
    """State of a citation lookup."""

    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CitationResult:
    """Citation count lookup outcome.

    ``UNKNOWN`` means the id was never looked up, ``UNRESOLVED`` means a
    lookup was attempted and failed.
    """

    status: CitationStatus
    count: Optional[int] = None

    def __post_init__(self) -> None:
        if self.status == CitationStatus.RESOLVED:
            if not isinstance(self.count, int) or isinstance(self.count, bool) or self.count < 0:
                raise ValueError("Resolved citation count must be a non-negative integer")
        elif self.count is not None:
            raise ValueError(f"{self.status.value} result cannot carry a count")

    @classmethod
    def resolved(cls, count: int) -> "CitationResult":
        return cls(CitationStatus.RESOLVED, count)

    @classmethod
    def unresolved(cls) -> "CitationResult":
        return cls(CitationStatus.UNRESOLVED)

    @classmethod
    def unknown(cls) -> "CitationResult":
        return cls(CitationStatus.UNKNOWN)

    @property
    def is_resolved(self) -> bool:
        return self.status == CitationStatus.RESOLVED

    @property
    def is_known(self) -> bool:
        return self.status != CitationStatus.UNKNOWN


@dataclass(frozen=True)
class Document:
    """Review document as read from disk."""

    filename: str
    content: str


@dataclass(frozen=True)
class PaperId:
    """Identifier derived from a review filename."""

    canonical: str
    display: str
    versionless: str

    @property
    def abs_url(self) -> str:
        return f"https://arxiv.org/abs/{self.versionless}"

    @property
    def pdf_url(self) -> str:
        return f"https://arxiv.org/pdf/{self.versionless}"


@dataclass(frozen=True)
class ReviewRecord:
    """Structured metadata extracted from a review document."""

    filename: str
    paper_id: PaperId
    title: str
    authors: str
    published_date: Optional[str]
    category: Category
    relevance_score: Optional[int]
    size_bytes: int
    citations: CitationResult = field(default_factory=CitationResult.unknown)

    @property
    def citation_count(self) -> Optional[int]:
        return self.citations.count

    def with_citations(self, citations: CitationResult) -> "ReviewRecord":
        """Return a copy carrying the given citation lookup result."""
        return replace(self, citations=citations)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "canonicalId": self.paper_id.canonical,
            "displayId": self.paper_id.display,
            "title": self.title,
            "authors": self.authors,
            "publishedDate": self.published_date,
            "category": self.category.value,
            "relevanceScore": self.relevance_score,
            "citationCount": self.citation_count,
            "sizeBytes": self.size_bytes,
            "arxivUrl": self.paper_id.abs_url,
            "pdfUrl": self.paper_id.pdf_url,
        }


@dataclass
class ReportSummary:
    """Summary block of the aggregate report."""

    total_papers: int
    total_reviews: int
    primary_reviews: int
    secondary_reviews: int
    processed_count: int
    citations_resolved: int
    citations_unresolved: int
    last_updated: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalPapers": self.total_papers,
            "totalReviews": self.total_reviews,
            "primaryReviews": self.primary_reviews,
            "secondaryReviews": self.secondary_reviews,
            "processedCount": self.processed_count,
            "citationsResolved": self.citations_resolved,
            "citationsUnresolved": self.citations_unresolved,
            "lastUpdated": self.last_updated.isoformat(),
        }


@dataclass
class AggregateReport:
    """Final output of an enrichment run."""

    summary: ReportSummary
    papers: list[Any]
    reviews: list[ReviewRecord]
    by_type: dict[Category, int]
    relevance_distribution: dict[int, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "papers": self.papers,
            "reviews": [review.to_dict() for review in self.reviews],
            "byType": {category.value: count for category, count in self.by_type.items()},
            "relevanceDistribution": {
                str(score): count for score, count in sorted(self.relevance_distribution.items())
            },
        }
