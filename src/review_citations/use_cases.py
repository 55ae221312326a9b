"""Business logic use cases."""

from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from review_citations.core import (
    AggregateReport,
    Category,
    CitationCache,
    CitationResult,
    CitationSource,
    CitationStatus,
    Document,
    MetadataExtractor,
    PaperId,
    ReportSummary,
    ReviewRecord,
    normalize,
)


class CitationFetcher:
    """Resolve citation counts, consulting the cache before any request."""

    def __init__(self, cache: CitationCache, source: CitationSource) -> None:
        self.cache = cache
        self.source = source
        self.cache_hits = 0
        self.fetched = 0

    async def resolve(self, paper_id: PaperId) -> CitationResult:
        """Return the cached result, or fetch once and cache the outcome."""
        cached = self.cache.get(paper_id.canonical)
        if cached.is_known:
            self.cache_hits += 1
            return cached

        result = await self.source.fetch_citation_count(paper_id)
        self.fetched += 1
        self.cache.put(paper_id.canonical, result)
        return result


class EnrichmentService:
    """Drive review documents through extraction and citation lookup."""

    def __init__(
        self,
        extractor: MetadataExtractor,
        cache: CitationCache,
        citation_source: CitationSource,
    ) -> None:
        self.extractor = extractor
        self.cache = cache
        self.fetcher = CitationFetcher(cache, citation_source)

    async def run(
        self,
        documents: list[Document],
        papers: Optional[list[Any]] = None,
        total_papers: int = 0,
    ) -> AggregateReport:
        """Enrich documents sequentially and build the aggregate report."""
        print("\n" + "=" * 70)
        print("📥 STAGE 1: LOADING CITATION CACHE")
        print("=" * 70)

        self.cache.load()
        stats = self.cache.get_stats()
        print(f"✓ Cached ids: {stats['total']} (resolved: {stats['resolved']}, unresolved: {stats['unresolved']})")

        print("\n" + "=" * 70)
        print("🔍 STAGE 2: EXTRACTION AND CITATION LOOKUP")
        print("=" * 70)
        print(f"Processing {len(documents)} reviews sequentially...")

        records = []
        for i, document in enumerate(documents, 1):
            records.append(await self._enrich(document, i, len(documents)))

        self.cache.persist()
        print(f"\n✓ Citation cache saved to {self.cache.path}")
        print(f"  • From cache: {self.fetcher.cache_hits}")
        print(f"  • Fetched: {self.fetcher.fetched}")

        print("\n" + "=" * 70)
        print("📊 STAGE 3: AGGREGATION")
        print("=" * 70)

        report = self.build_report(records, papers or [], total_papers)
        summary = report.summary
        print(f"✓ Reviews: {summary.total_reviews}")
        print(f"✓ Citations resolved: {summary.citations_resolved}")
        if summary.citations_unresolved:
            print(f"⚠️  Citations unresolved: {summary.citations_unresolved}")

        return report

    async def _enrich(self, document: Document, index: int, total: int) -> ReviewRecord:
        paper_id = normalize(document.filename)
        record = self.extractor.extract(document, paper_id)
        print(f"\n  [{index}/{total}] 📄 {record.title[:70]}")
        print(f"  └─ ID: {paper_id.canonical}")

        citations = await self.fetcher.resolve(paper_id)
        if citations.is_resolved:
            print(f"  └─ Citations: {citations.count}")
        else:
            print("  └─ Citations: unresolved")

        return record.with_citations(citations)

    def build_report(
        self,
        records: list[ReviewRecord],
        papers: list[Any],
        total_papers: int,
        now: Optional[datetime] = None,
    ) -> AggregateReport:
        """Assemble summary counts, category counts and the relevance histogram."""
        by_type = {category: 0 for category in Category}
        for record in records:
            by_type[record.category] += 1

        distribution = Counter(
            record.relevance_score for record in records if record.relevance_score is not None
        )
        statuses = Counter(record.citations.status for record in records)

        summary = ReportSummary(
            total_papers=total_papers,
            total_reviews=len(records),
            primary_reviews=by_type[Category.PRIMARY],
            secondary_reviews=by_type[Category.SECONDARY],
            processed_count=len(papers),
            citations_resolved=statuses[CitationStatus.RESOLVED],
            citations_unresolved=statuses[CitationStatus.UNRESOLVED],
            last_updated=now or datetime.now(timezone.utc),
        )

        return AggregateReport(
            summary=summary,
            papers=papers,
            reviews=records,
            by_type=by_type,
            relevance_distribution=dict(distribution),
        )


@dataclass
class RefreshStats:
    """Outcome of a refresh pass over unresolved ids."""

    attempted: int
    updated: int
    failed: int


class CitationRefreshService:
    """Retry lookups for cached ids whose previous fetch failed."""

    def __init__(self, cache: CitationCache, citation_source: CitationSource) -> None:
        self.cache = cache
        self.citation_source = citation_source

    async def refresh_unresolved(self, limit: Optional[int] = None) -> RefreshStats:
        """Re-fetch up to ``limit`` unresolved ids and persist the cache."""
        self.cache.load()
        pending = self.cache.unresolved_ids()
        if limit is not None:
            pending = pending[:max(0, limit)]

        if not pending:
            print("No papers with unresolved citations found. Cache is complete!")
            return RefreshStats(attempted=0, updated=0, failed=0)

        print(f"Updating {len(pending)} papers with unresolved citations...")

        updated = 0
        failed = 0
        for i, canonical in enumerate(pending, 1):
            print(f"[{i}/{len(pending)}] Fetching {canonical}...")
            result = await self.citation_source.fetch_citation_count(normalize(canonical))

            if result.is_resolved:
                self.cache.put(canonical, result)
                updated += 1
                print(f"  -> {result.count} citations")
            else:
                failed += 1
                print("  -> Failed (still unresolved)")

        self.cache.persist()
        print("\n✓ Cache updated successfully!")
        print(f"  • Updated: {updated}")
        print(f"  • Failed: {failed}")

        return RefreshStats(attempted=len(pending), updated=updated, failed=failed)
