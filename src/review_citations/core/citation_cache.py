"""Persistent citation count cache backed by a single JSON file."""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from review_citations.core.entities import CitationResult, CitationStatus
from review_citations.core.errors import CacheError


class CitationCache:
    """Map paper ids to their last known citation count.

    On disk the cache is a JSON object: integer values are resolved counts,
    ``null`` marks an id whose lookup failed. Ids missing from the file were
    never looked up.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._entries: dict[str, Optional[int]] = {}
        self.loaded = False

    def load(self) -> dict[str, Optional[int]]:
        """Load the cache file, resetting to empty if it is missing or corrupt."""
        self._entries = {}
        self.loaded = True

        if not self.path.exists():
            return dict(self._entries)

        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise CacheError(f"Cannot read citation cache {self.path}: {e}") from e

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            print(f"⚠️  Warning: Citation cache {self.path} is corrupt ({e}), starting empty")
            return dict(self._entries)

        if not isinstance(data, dict):
            print(f"⚠️  Warning: Citation cache {self.path} is not a JSON object, starting empty")
            return dict(self._entries)

        dropped = 0
        for key, value in data.items():
            if value is None or (isinstance(value, int) and not isinstance(value, bool) and value >= 0):
                self._entries[key] = value
            else:
                dropped += 1

        if dropped:
            print(f"⚠️  Warning: Dropped {dropped} invalid entries from citation cache")

        return dict(self._entries)

    def get(self, paper_id: str) -> CitationResult:
        """Look up a cached result; ``UNKNOWN`` if the id was never stored."""
        if paper_id not in self._entries:
            return CitationResult.unknown()
        value = self._entries[paper_id]
        if value is None:
            return CitationResult.unresolved()
        return CitationResult.resolved(value)

    def put(self, paper_id: str, result: CitationResult) -> bool:
        """Store a lookup result.

        A resolved count is never replaced.

        Returns:
            True if the entry was written
        """
        if result.status == CitationStatus.UNKNOWN:
            raise ValueError("Cannot cache an unknown citation result")

        if self._entries.get(paper_id) is not None:
            return False

        self._entries[paper_id] = result.count
        return True

    def unresolved_ids(self) -> list[str]:
        """Ids whose last lookup failed, in insertion order."""
        return [key for key, value in self._entries.items() if value is None]

    def __contains__(self, paper_id: str) -> bool:
        return paper_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def persist(self) -> None:
        """Overwrite the cache file with the in-memory mapping.

        Writes a temporary file next to the target and renames it into place.
        """
        payload = json.dumps(self._entries, indent=2, sort_keys=True, ensure_ascii=False)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.write("\n")
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise CacheError(f"Cannot write citation cache {self.path}: {e}") from e

    def get_stats(self) -> dict:
        """Get statistics about cached entries."""
        unresolved = len(self.unresolved_ids())
        return {
            "total": len(self._entries),
            "resolved": len(self._entries) - unresolved,
            "unresolved": unresolved,
        }
