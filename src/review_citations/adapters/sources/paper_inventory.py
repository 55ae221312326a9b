"""Processed-paper list and raw paper counts merged into the report summary."""

import json
from pathlib import Path
from typing import Any


def load_processed_papers(path: Path) -> list[Any]:
    """Load the processed-paper list; missing or invalid files yield an empty list."""
    if not path.exists():
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"⚠️  Warning: Could not read processed papers {path}: {e}")
        return []

    if not isinstance(data, list):
        print(f"⚠️  Warning: Processed papers {path} is not a JSON list, ignoring")
        return []

    return data


def count_papers(papers_dir: Path, extension: str = ".pdf") -> int:
    """Count raw paper files with the given extension."""
    if not papers_dir.is_dir():
        return 0
    return sum(1 for p in papers_dir.iterdir() if p.name.endswith(extension))
