"""Review document and paper inventory sources."""

from review_citations.adapters.sources.paper_inventory import count_papers, load_processed_papers
from review_citations.adapters.sources.review_directory import ReviewDirectorySource

__all__ = ["ReviewDirectorySource", "count_papers", "load_processed_papers"]
