"""Tests for iconcdn.version — region lookup and banner text."""

from pathlib import Path

import pytest

from iconcdn.version import format_banner, read_region_file, resolve_region


class TestResolveRegion:
    def test_environment_wins(self, tmp_path: Path) -> None:
        region_file = tmp_path / "region.txt"
        region_file.write_text("from-file")
        assert resolve_region({"region": "us-east"}, region_file) == "us-east"

    def test_environment_is_verbatim(self) -> None:
        assert resolve_region({"region": "Not Validated!"}, None) == "Not Validated!"

    def test_file_fallback(self, tmp_path: Path) -> None:
        region_file = tmp_path / "region.txt"
        region_file.write_text("eu-west\n")
        assert resolve_region({}, region_file) == "eu-west"

    def test_nothing_configured(self, tmp_path: Path) -> None:
        assert resolve_region({}, None) is None
        assert resolve_region({}, tmp_path / "missing.txt") is None


class TestReadRegionFile:
    @pytest.mark.parametrize("content", ["us_east-1", "a", "abcdefghij"])
    def test_accepted(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "region.txt"
        path.write_text(content)
        assert read_region_file(path) == content

    @pytest.mark.parametrize("content", ["abcdefghijk", "US-EAST", "us east", "", "eu.west"])
    def test_rejected(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "region.txt"
        path.write_text(content)
        assert read_region_file(path) is None


class TestFormatBanner:
    def test_without_region(self) -> None:
        assert format_banner("CDN", "1.2.0", "Python", None) == "CDN version 1.2.0 (Python)"

    def test_with_region(self) -> None:
        assert format_banner("CDN", "1.2.0", "Python", "us-east") == (
            "CDN version 1.2.0 (Python, us-east)"
        )
