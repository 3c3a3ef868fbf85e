"""Tests for iconcdn.registry — collection discovery and lookup."""

import logging
from pathlib import Path

import pytest

from iconcdn.registry import CollectionRegistry, collection_prefix, scan_directory


class TestCollectionPrefix:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("mdi.json", "mdi"),
            ("fa-solid.json", "fa-solid"),
            (".hidden.json", None),
            ("_draft.json", None),
            ("mdi.svg", None),
            ("two.dots.json", None),
            ("noext", None),
            ("", None),
        ],
    )
    def test_rules(self, filename: str, expected: str | None) -> None:
        assert collection_prefix(filename) == expected


class TestScanDirectory:
    def test_only_collections(self, collection_dir: Path) -> None:
        assert set(scan_directory(collection_dir)) == {"mdi", "fa"}

    def test_missing_directory_is_skipped(self, tmp_path: Path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="iconcdn.registry"):
            assert scan_directory(tmp_path / "missing") == {}
        assert "does not exist" in caplog.text

    def test_subdirectory_named_like_collection(self, tmp_path: Path) -> None:
        (tmp_path / "dir.json").mkdir()
        assert scan_directory(tmp_path) == {}


class TestCollectionRegistry:
    def test_lookup(self, collection_dir: Path) -> None:
        registry = CollectionRegistry([collection_dir])
        result = registry.lookup("mdi")
        assert result.found is True
        assert result.path == collection_dir / "mdi.json"
        assert result.last_modified == (collection_dir / "mdi.json").stat().st_mtime

    def test_unknown_prefix(self, collection_dir: Path) -> None:
        result = CollectionRegistry([collection_dir]).lookup("nope")
        assert result.found is False
        assert result.path is None

    def test_later_directories_override(self, tmp_path: Path) -> None:
        first = tmp_path / "a"
        second = tmp_path / "b"
        first.mkdir()
        second.mkdir()
        (first / "mdi.json").write_text("{}")
        (second / "mdi.json").write_text("{}")
        registry = CollectionRegistry([first, second])
        assert registry.lookup("mdi").path == second / "mdi.json"

    def test_extra_collections(self, collection_dir: Path, tmp_path: Path) -> None:
        bundled = tmp_path / "bundled.json"
        bundled.write_text("{}")
        registry = CollectionRegistry([collection_dir], extra={"emoji": bundled})
        assert registry.lookup("emoji").path == bundled

    def test_directories_override_extra(self, collection_dir: Path, tmp_path: Path) -> None:
        bundled = tmp_path / "bundled.json"
        bundled.write_text("{}")
        registry = CollectionRegistry([collection_dir], extra={"mdi": bundled})
        assert registry.lookup("mdi").path == collection_dir / "mdi.json"

    def test_index_is_cached_until_refresh(self, collection_dir: Path) -> None:
        registry = CollectionRegistry([collection_dir])
        assert "new" not in registry.collections()
        (collection_dir / "new.json").write_text("{}")
        assert registry.lookup("new").found is False
        registry.refresh()
        assert registry.lookup("new").found is True

    def test_deleted_file(self, collection_dir: Path) -> None:
        registry = CollectionRegistry([collection_dir])
        registry.collections()
        (collection_dir / "fa.json").unlink()
        assert registry.lookup("fa").found is False

    def test_index_is_read_only(self, collection_dir: Path) -> None:
        registry = CollectionRegistry([collection_dir])
        with pytest.raises(TypeError):
            registry.collections()["x"] = Path("x")  # type: ignore[index]
