"""Citation service adapters."""

from review_citations.adapters.citations.semantic_scholar_client import SemanticScholarClient

__all__ = ["SemanticScholarClient"]
