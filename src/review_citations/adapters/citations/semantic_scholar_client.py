"""Semantic Scholar Graph API client for citation counts."""

from typing import Any, Optional

import httpx

from review_citations.config import Settings
from review_citations.core import CitationResult, CitationSource, PaperId, RequestPacer


class SemanticScholarClient(CitationSource):
    """Fetch arXiv paper citation counts, one paced request per lookup."""

    emoji = "📚"
    name = "Semantic Scholar"

    def __init__(
        self,
        base_url: str = "https://api.semanticscholar.org/graph/v1",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        pacer: Optional[RequestPacer] = None,
        request_interval: float = 1.1,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.pacer = pacer or RequestPacer(request_interval)
        self.requests_sent = 0

    @classmethod
    def from_settings(cls, settings: Settings) -> "SemanticScholarClient":
        return cls(
            base_url=settings.citations.base_url,
            api_key=settings.semantic_scholar_api_key,
            timeout=settings.citations.timeout,
            request_interval=settings.citations.request_interval,
        )

    def paper_url(self, paper_id: PaperId) -> str:
        return f"{self.base_url}/paper/arXiv:{paper_id.versionless}"

    async def fetch_citation_count(self, paper_id: PaperId) -> CitationResult:
        """Fetch the citation count; any failure yields an unresolved result."""
        await self.pacer.acquire()
        self.requests_sent += 1

        headers = {"x-api-key": self.api_key} if self.api_key else {}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(
                    self.paper_url(paper_id),
                    params={"fields": "citationCount"},
                    headers=headers,
                )
        except httpx.HTTPError as e:
            print(f"  ⚠️  Network error fetching citations for {paper_id.versionless}: {e}")
            return CitationResult.unresolved()

        if response.status_code != 200:
            print(f"  ⚠️  Failed to fetch citations for {paper_id.versionless}: HTTP {response.status_code}")
            return CitationResult.unresolved()

        try:
            data = response.json()
        except ValueError as e:
            print(f"  ⚠️  Error parsing citation data for {paper_id.versionless}: {e}")
            return CitationResult.unresolved()

        count = self._parse_count(data)
        if count is None:
            print(f"  ⚠️  Unexpected citation data for {paper_id.versionless}: {str(data)[:100]}")
            return CitationResult.unresolved()

        return CitationResult.resolved(count)

    def _parse_count(self, data: Any) -> Optional[int]:
        """Extract ``citationCount``; missing or empty counts as zero."""
        if not isinstance(data, dict):
            return None

        count = data.get("citationCount")
        if count is None or count == "":
            return 0
        if isinstance(count, bool):
            return None
        if isinstance(count, int):
            return count if count >= 0 else None
        return None
