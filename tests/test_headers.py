"""Tests for iconcdn.http.headers — immutable, case-insensitive Headers."""

import pytest

from iconcdn.http.headers import Headers


def _h(*pairs: tuple[str, str]) -> Headers:
    """Shorthand: build Headers from string pairs."""
    raw = tuple((k.encode("latin-1"), v.encode("latin-1")) for k, v in pairs)
    return Headers(raw)


class TestHeaders:
    def test_case_insensitive(self) -> None:
        h = _h(("If-Modified-Since", "x"))
        assert h["if-modified-since"] == "x"
        assert h["IF-MODIFIED-SINCE"] == "x"

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError):
            _h(("Accept", "*/*"))["Origin"]

    def test_contains(self) -> None:
        h = _h(("Origin", "https://a.test"))
        assert "origin" in h
        assert "pragma" not in h
        assert 42 not in h  # type: ignore[operator]

    def test_first_value_wins(self) -> None:
        h = _h(("Pragma", "cache"), ("Pragma", "no-cache"))
        assert h["pragma"] == "cache"
        assert len(h) == 1

    def test_get_with_default(self) -> None:
        h = _h(("Accept", "*/*"))
        assert h.get("x-missing") is None
        assert h.get("x-missing", "fallback") == "fallback"

    def test_from_pairs(self) -> None:
        h = Headers.from_pairs({"Origin": "https://a.test"})
        assert h["Origin"] == "https://a.test"


class TestMentions:
    def test_substring(self) -> None:
        assert _h(("Cache-Control", "max-age=0, no-cache")).mentions("cache-control", "no-cache")

    def test_case_sensitive_value(self) -> None:
        assert not _h(("Pragma", "NO-CACHE")).mentions("pragma", "no-cache")

    def test_absent_header(self) -> None:
        assert not Headers().mentions("pragma", "no-cache")
