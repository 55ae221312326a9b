"""CLI entry point for review citations."""

import asyncio
import sys
from contextlib import redirect_stdout
from pathlib import Path
from typing import Optional

import typer

from review_citations.adapters.citations import SemanticScholarClient
from review_citations.adapters.report import JsonReportWriter
from review_citations.adapters.sources import (
    ReviewDirectorySource,
    count_papers,
    load_processed_papers,
)
from review_citations.config import Settings, get_settings
from review_citations.core import AggregateReport, CitationCache, MetadataExtractor, ReviewCitationsError
from review_citations.use_cases import CitationRefreshService, EnrichmentService

cli = typer.Typer(help="Enrich paper reviews with cached citation counts.")


def app() -> None:
    """CLI entry point."""
    cli()


@cli.command()
def build(
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
    output: Optional[Path] = typer.Option(None, "--output", help="Report path, '-' for stdout"),
) -> None:
    """Build the review report with citation counts."""
    settings = get_settings(config)
    output = output or settings.output_path

    # Progress goes to stderr when the report itself is written to stdout
    progress = sys.stderr if str(output) == "-" else sys.stdout

    try:
        with redirect_stdout(progress):
            report = asyncio.run(async_build(settings))
        JsonReportWriter().write(report, output)
    except ReviewCitationsError as e:
        print(f"❌ {e}", file=sys.stderr)
        raise typer.Exit(code=1)

    if progress is sys.stdout:
        print(f"\n✅ Report saved: {output}")


async def async_build(settings: Settings) -> AggregateReport:
    """Async implementation of build command."""
    print("\n" + "=" * 70)
    print("📚 REVIEW CITATIONS - Report Builder")
    print("=" * 70)

    print("\n🔑 Credentials:")
    if settings.semantic_scholar_api_key:
        print("  ✓ SEMANTIC_SCHOLAR_API_KEY - authenticated rate limit")
    else:
        print("  ⚠️  SEMANTIC_SCHOLAR_API_KEY - not set (public rate limit)")

    print("\n⚙️  Settings:")
    print(f"  • Reviews: {settings.reviews_dir}")
    print(f"  • Cache: {settings.cache_path}")
    print(f"  • Request interval: {settings.citations.request_interval:.1f}s")

    source = ReviewDirectorySource(settings.reviews_dir, settings.extraction.review_extension)
    documents = source.load_documents()
    papers = load_processed_papers(settings.processed_papers_path)
    total_papers = count_papers(settings.papers_dir, settings.extraction.paper_extension)

    extractor = MetadataExtractor(
        title_labels=settings.extraction.title_labels,
        primary_marker=settings.extraction.primary_marker,
        secondary_marker=settings.extraction.secondary_marker,
    )
    service = EnrichmentService(
        extractor=extractor,
        cache=CitationCache(settings.cache_path),
        citation_source=SemanticScholarClient.from_settings(settings),
    )

    return await service.run(documents, papers=papers, total_papers=total_papers)


@cli.command()
def refresh(
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Only update N papers"),
) -> None:
    """Retry citation lookups that previously failed."""
    settings = get_settings(config)
    service = CitationRefreshService(
        cache=CitationCache(settings.cache_path),
        citation_source=SemanticScholarClient.from_settings(settings),
    )

    try:
        asyncio.run(service.refresh_unresolved(limit))
    except ReviewCitationsError as e:
        print(f"❌ {e}", file=sys.stderr)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
