"""Icon collection registry.

Maps a collection prefix to its JSON file on disk. Directories are scanned
once, on first lookup, and the result is frozen until ``refresh()``.
"""

import logging
import os
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

logger = logging.getLogger("iconcdn.registry")

COLLECTION_SUFFIX = "json"


@dataclass(frozen=True, slots=True)
class CollectionLookupResult:
    """Outcome of a prefix lookup.

    ``last_modified`` is the collection file's mtime in POSIX seconds.
    """

    found: bool
    path: Path | None = None
    last_modified: float | None = None


NOT_FOUND = CollectionLookupResult(found=False)


def collection_prefix(filename: str) -> str | None:
    """Return the prefix a file name publishes, or None if it is not a collection.

    Hidden (``.``) and private (``_``) files are skipped; the name must be
    exactly ``<prefix>.json``.
    """
    if not filename or filename[0] in "._":
        return None
    parts = filename.split(".")
    if len(parts) != 2 or parts[1] != COLLECTION_SUFFIX:
        return None
    return parts[0]


def scan_directory(directory: str | Path) -> dict[str, Path]:
    """List the collections in one directory as ``{prefix: path}``."""
    found: dict[str, Path] = {}
    root = Path(directory)
    try:
        entries = sorted(os.scandir(root), key=lambda entry: entry.name)
    except FileNotFoundError:
        logger.warning("Collection directory %s does not exist, skipping", root)
        return found
    except NotADirectoryError:
        logger.warning("Collection path %s is not a directory, skipping", root)
        return found

    for entry in entries:
        prefix = collection_prefix(entry.name)
        if prefix is None or not entry.is_file():
            continue
        found[prefix] = root / entry.name
    return found


class CollectionRegistry:
    """Lazily-built, thread-safe prefix -> collection file index.

    Usage::

        registry = CollectionRegistry(["./json"], extra={"mdi": "/opt/icons/mdi.json"})
        result = registry.lookup("mdi")
        if result.found:
            ...

    Later directories override earlier ones; ``extra`` entries are applied
    first so that custom directories can override bundled sets.
    """

    __slots__ = ("_directories", "_extra", "_index", "_lock")

    def __init__(
        self,
        directories: Iterable[str | Path] = (),
        *,
        extra: Mapping[str, str | Path] | None = None,
    ) -> None:
        self._directories: tuple[Path, ...] = tuple(Path(d) for d in directories)
        self._extra: dict[str, Path] = {k: Path(v) for k, v in (extra or {}).items()}
        self._index: Mapping[str, Path] | None = None
        self._lock = threading.Lock()

    @property
    def directories(self) -> tuple[Path, ...]:
        return self._directories

    def collections(self) -> Mapping[str, Path]:
        """The frozen ``{prefix: path}`` index, built on first access."""
        index = self._index
        if index is not None:
            return index
        with self._lock:
            if self._index is None:
                self._index = self._build()
            return self._index

    def refresh(self) -> None:
        """Drop the index so the next lookup rescans the directories."""
        with self._lock:
            self._index = None

    def lookup(self, prefix: str) -> CollectionLookupResult:
        path = self.collections().get(prefix)
        if path is None:
            return NOT_FOUND
        try:
            mtime = path.stat().st_mtime
        except OSError:
            logger.warning("Collection %r vanished from %s", prefix, path)
            return NOT_FOUND
        return CollectionLookupResult(found=True, path=path, last_modified=mtime)

    def _build(self) -> Mapping[str, Path]:
        index: dict[str, Path] = dict(self._extra)
        for directory in self._directories:
            index.update(scan_directory(directory))
        logger.info(
            "Indexed %d icon collection(s) from %d director%s",
            len(index),
            len(self._directories),
            "y" if len(self._directories) == 1 else "ies",
        )
        return MappingProxyType(index)
