"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


@dataclass
class PathsConfig:
    """Path settings, relative entries resolved against ``root``."""
    root: Path = Path("..")
    reviews_dir: Path = Path("reviews")
    papers_dir: Path = Path("research_papers")
    processed_papers: Path = Path("processed_papers.json")
    cache_file: Path = Path(".citation_cache.json")
    output_file: Path = Path("src/data/papers.json")


@dataclass
class CitationsConfig:
    """Semantic Scholar API settings."""
    base_url: str = "https://api.semanticscholar.org/graph/v1"
    request_interval: float = 1.1
    timeout: float = 30.0


@dataclass
class ExtractionConfig:
    """Review parsing settings."""
    review_extension: str = ".md"
    paper_extension: str = ".pdf"
    primary_marker: str = "vs_yrsn"
    secondary_marker: str = "techreview"
    title_labels: list[str] = field(default_factory=lambda: [
        "Technical Review",
        "YRSN Comparison",
    ])


@dataclass
class Settings:
    """Application settings."""

    # API key (from environment only)
    semantic_scholar_api_key: Optional[str] = None

    # Config sections
    paths: PathsConfig = field(default_factory=PathsConfig)
    citations: CitationsConfig = field(default_factory=CitationsConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against the root directory."""
        return path if path.is_absolute() else self.paths.root / path

    @property
    def reviews_dir(self) -> Path:
        return self.resolve(self.paths.reviews_dir)

    @property
    def papers_dir(self) -> Path:
        return self.resolve(self.paths.papers_dir)

    @property
    def processed_papers_path(self) -> Path:
        return self.resolve(self.paths.processed_papers)

    @property
    def cache_path(self) -> Path:
        return self.resolve(self.paths.cache_file)

    @property
    def output_path(self) -> Path:
        return self.resolve(self.paths.output_file)


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(
        semantic_scholar_api_key=os.getenv("SEMANTIC_SCHOLAR_API_KEY") or None,
    )

    for key, value in (config.get("paths") or {}).items():
        setattr(settings.paths, key, Path(value))

    for key, value in (config.get("citations") or {}).items():
        setattr(settings.citations, key, value)

    for key, value in (config.get("extraction") or {}).items():
        setattr(settings.extraction, key, value)

    return settings
