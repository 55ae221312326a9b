"""Core interfaces for adapters."""

from abc import ABC, abstractmethod

from review_citations.core.entities import CitationResult, Document, PaperId


class DocumentSource(ABC):
    """Interface for reading review documents."""

    @abstractmethod
    def load_documents(self) -> list[Document]:
        """Read all review documents."""
        pass


class CitationSource(ABC):
    """Interface for the external citation count service."""

    @abstractmethod
    async def fetch_citation_count(self, paper_id: PaperId) -> CitationResult:
        """Issue one lookup; failures are returned as unresolved, never raised."""
        pass
