"""Icon resolution boundary.

The service never renders icons itself. A ``QueryEngine`` turns a collection
file plus an icon query into a body; ``RegistryResolver`` joins it with the
collection registry to give the router a single ``IconResolver``.
"""

import dataclasses
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from iconcdn.registry import CollectionRegistry
from iconcdn.results import ErrorStatus, IconPayload, Resolution


class QueryEngine(Protocol):
    """Renders an icon query against one collection file.

    Returns an ``IconPayload`` or an ``ErrorStatus`` (e.g. 404 for an
    unknown icon). May block on I/O.
    """

    def query(
        self,
        collection: Path,
        icon_query: str,
        extension: str,
        params: Mapping[str, str],
    ) -> Resolution: ...


class IconResolver(Protocol):
    """What the router calls for every icon route."""

    def resolve(
        self,
        prefix: str,
        icon_query: str,
        extension: str,
        params: Mapping[str, str],
    ) -> Resolution: ...


class RegistryResolver:
    """Resolve icons through a ``CollectionRegistry`` and a ``QueryEngine``.

    Unknown prefixes answer 404 without touching the engine. Successful
    payloads inherit the collection file's mtime as ``last_modified``.
    """

    __slots__ = ("engine", "registry")

    def __init__(self, registry: CollectionRegistry, engine: QueryEngine) -> None:
        self.registry = registry
        self.engine = engine

    def resolve(
        self,
        prefix: str,
        icon_query: str,
        extension: str,
        params: Mapping[str, str],
    ) -> Resolution:
        lookup = self.registry.lookup(prefix)
        if not lookup.found or lookup.path is None:
            return ErrorStatus(404)

        result = self.engine.query(lookup.path, icon_query, extension, params)
        if isinstance(result, IconPayload) and result.last_modified is None:
            result = dataclasses.replace(result, last_modified=lookup.last_modified)
        return result
