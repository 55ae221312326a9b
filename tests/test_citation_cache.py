"""Tests for the citation cache store."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from review_citations.core import CacheError, CitationCache, CitationResult, CitationStatus


def test_missing_file_loads_empty() -> None:
    """Test a missing cache file yields an empty cache."""
    with TemporaryDirectory() as tmpdir:
        cache = CitationCache(Path(tmpdir) / "cache.json")

        assert cache.load() == {}
        assert cache.get("2401.12345").status == CitationStatus.UNKNOWN


def test_persist_load_round_trip() -> None:
    """Test persisted entries read back identically, unresolved included."""
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "cache.json"
        cache = CitationCache(path)
        cache.load()
        cache.put("2401.00001", CitationResult.resolved(42))
        cache.put("2401.00002", CitationResult.resolved(0))
        cache.put("2401.00003", CitationResult.unresolved())
        cache.persist()

        cache2 = CitationCache(path)
        loaded = cache2.load()

        assert loaded == {"2401.00001": 42, "2401.00002": 0, "2401.00003": None}
        assert cache2.get("2401.00001") == CitationResult.resolved(42)
        assert cache2.get("2401.00003") == CitationResult.unresolved()
        assert cache2.get("2401.00004") == CitationResult.unknown()
        assert "2401.00003" in cache2
        assert "2401.00004" not in cache2


def test_persist_writes_json_null_for_unresolved() -> None:
    """Test the on-disk format."""
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "nested" / "cache.json"
        cache = CitationCache(path)
        cache.load()
        cache.put("b", CitationResult.unresolved())
        cache.put("a", CitationResult.resolved(7))
        cache.persist()

        assert json.loads(path.read_text(encoding="utf-8")) == {"a": 7, "b": None}
        # No temporary files left behind
        assert [p.name for p in path.parent.iterdir()] == ["cache.json"]


def test_corrupt_file_resets_to_empty() -> None:
    """Test invalid JSON does not abort loading."""
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "cache.json"
        path.write_text("{not json", encoding="utf-8")

        cache = CitationCache(path)
        assert cache.load() == {}

        cache.put("x", CitationResult.resolved(1))
        cache.persist()
        assert CitationCache(path).load() == {"x": 1}


def test_invalid_utf8_resets_to_empty() -> None:
    """Test undecodable bytes are treated as a corrupt cache."""
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "cache.json"
        path.write_bytes(b'{"2401.00001": 3\xff\xfe')

        cache = CitationCache(path)
        assert cache.load() == {}
        assert cache.get("2401.00001") == CitationResult.unknown()


def test_non_object_file_resets_to_empty() -> None:
    """Test a JSON list is treated as corrupt."""
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "cache.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        assert CitationCache(path).load() == {}


def test_invalid_entries_dropped() -> None:
    """Test entries that are not counts or null are skipped."""
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "cache.json"
        path.write_text(
            json.dumps({"ok": 3, "neg": -1, "text": "12", "flag": True, "none": None}),
            encoding="utf-8",
        )

        assert CitationCache(path).load() == {"ok": 3, "none": None}


def test_unreadable_path_is_fatal() -> None:
    """Test a cache path that cannot be read raises CacheError."""
    with TemporaryDirectory() as tmpdir:
        cache = CitationCache(Path(tmpdir))

        with pytest.raises(CacheError):
            cache.load()


def test_resolved_value_never_overwritten() -> None:
    """Test resolved entries are final."""
    with TemporaryDirectory() as tmpdir:
        cache = CitationCache(Path(tmpdir) / "cache.json")
        cache.load()

        assert cache.put("id", CitationResult.resolved(10))
        assert not cache.put("id", CitationResult.resolved(99))
        assert not cache.put("id", CitationResult.unresolved())
        assert cache.get("id") == CitationResult.resolved(10)


def test_unresolved_can_be_resolved() -> None:
    """Test a failed lookup can later be replaced by a count."""
    with TemporaryDirectory() as tmpdir:
        cache = CitationCache(Path(tmpdir) / "cache.json")
        cache.load()

        cache.put("id", CitationResult.unresolved())
        assert cache.put("id", CitationResult.resolved(5))
        assert cache.get("id") == CitationResult.resolved(5)


def test_put_unknown_rejected() -> None:
    """Test unknown results cannot be stored."""
    cache = CitationCache(Path("unused.json"))

    with pytest.raises(ValueError):
        cache.put("id", CitationResult.unknown())


def test_unresolved_ids_and_stats() -> None:
    """Test listing unresolved ids and statistics."""
    with TemporaryDirectory() as tmpdir:
        cache = CitationCache(Path(tmpdir) / "cache.json")
        cache.load()
        cache.put("a", CitationResult.unresolved())
        cache.put("b", CitationResult.resolved(1))
        cache.put("c", CitationResult.unresolved())

        assert cache.unresolved_ids() == ["a", "c"]
        assert cache.get_stats() == {"total": 3, "resolved": 1, "unresolved": 2}
        assert len(cache) == 3
