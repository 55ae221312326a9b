"""Core domain layer."""

from review_citations.core.citation_cache import CitationCache
from review_citations.core.entities import (
    AggregateReport,
    Category,
    CitationResult,
    CitationStatus,
    Document,
    PaperId,
    ReportSummary,
    ReviewRecord,
)
from review_citations.core.errors import (
    CacheError,
    ReportWriteError,
    ReviewCitationsError,
    ReviewSourceError,
)
from review_citations.core.extraction import MetadataExtractor
from review_citations.core.identifiers import normalize
from review_citations.core.interfaces import CitationSource, DocumentSource
from review_citations.core.pacing import RequestPacer

__all__ = [
    "AggregateReport",
    "Category",
    "CitationResult",
    "CitationStatus",
    "Document",
    "PaperId",
    "ReportSummary",
    "ReviewRecord",
    "CitationCache",
    "MetadataExtractor",
    "normalize",
    "CitationSource",
    "DocumentSource",
    "RequestPacer",
    "ReviewCitationsError",
    "ReviewSourceError",
    "CacheError",
    "ReportWriteError",
]
