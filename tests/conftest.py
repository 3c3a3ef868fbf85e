"""Shared fixtures: a recording query engine and a collection directory."""

import os
from collections.abc import Mapping
from pathlib import Path

import pytest

from iconcdn.app import IconCDN
from iconcdn.config import CDNConfig
from iconcdn.results import ErrorStatus, IconPayload, Resolution

CONTENT_TYPES = {
    "svg": "image/svg+xml",
    "js": "application/javascript; charset=utf-8",
    "json": "application/json; charset=utf-8",
}

# 2023-11-14 22:13:20 UTC
COLLECTION_MTIME = 1_700_000_000


class RecordingEngine:
    """Query engine fake: renders a stub body and records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[Path, str, str, dict[str, str]]] = []

    def query(
        self,
        collection: Path,
        icon_query: str,
        extension: str,
        params: Mapping[str, str],
    ) -> Resolution:
        self.calls.append((collection, icon_query, extension, dict(params)))
        if icon_query == "missing":
            return ErrorStatus(404)
        if icon_query == "forbidden":
            return ErrorStatus(403)
        if icon_query == "boom":
            msg = "engine exploded"
            raise RuntimeError(msg)
        body = f"<{collection.stem}:{icon_query}.{extension}>".encode()
        return IconPayload(
            body=body,
            content_type=CONTENT_TYPES[extension],
            filename=f"{icon_query}.{extension}",
        )


@pytest.fixture
def collection_dir(tmp_path: Path) -> Path:
    """A directory with two collections plus files the registry must ignore."""
    root = tmp_path / "json"
    root.mkdir()
    for name in ("mdi.json", "fa.json"):
        path = root / name
        path.write_text("{}")
        os.utime(path, (COLLECTION_MTIME, COLLECTION_MTIME))
    (root / ".hidden.json").write_text("{}")
    (root / "_private.json").write_text("{}")
    (root / "notes.txt").write_text("")
    (root / "two.dots.json").write_text("{}")
    return root


@pytest.fixture
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def make_app(collection_dir: Path, engine: RecordingEngine):
    """Factory for an app over ``collection_dir`` with a fixed clock and no region."""

    def factory(**overrides: object) -> IconCDN:
        config_fields = {
            k: overrides.pop(k)
            for k in list(overrides)
            if k in CDNConfig.__dataclass_fields__
        }
        config = CDNConfig(collection_dirs=(collection_dir,), **config_fields)  # type: ignore[arg-type]
        overrides.setdefault("engine", engine)
        overrides.setdefault("region", None)
        return IconCDN(config, **overrides)  # type: ignore[arg-type]

    return factory
