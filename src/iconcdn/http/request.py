"""Immutable HTTP request.

Only metadata is kept: the service never reads request bodies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from iconcdn.http.headers import Headers
from iconcdn.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request, frozen at creation."""

    method: str
    path: str
    root_path: str
    headers: Headers
    query: QueryParams
    http_version: str
    client: tuple[str, int] | None
    raw_path: str | None = None

    @property
    def origin(self) -> str | None:
        """The ``Origin`` header, present on cross-origin requests."""
        return self.headers.get("origin")

    @property
    def is_preflight(self) -> bool:
        return self.method == "OPTIONS"

    @property
    def url(self) -> str:
        """Full request URL (path + query string)."""
        qs = self.query._raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    @property
    def app_path(self) -> str:
        """The undecoded path below the ASGI mount point.

        Prefers ``raw_path`` so percent-escapes reach routing intact; falls
        back to the decoded ``path`` when the server sends no raw path.
        Servers differ on whether the path already includes ``root_path``;
        strip it when it does.
        """
        path = self.path if self.raw_path is None else self.raw_path
        if self.root_path and path.startswith(self.root_path):
            return path[len(self.root_path) :]
        return path

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI scope."""
        client = scope.get("client")
        raw_path = scope.get("raw_path")
        return cls(
            method=scope["method"],
            path=scope["path"],
            root_path=scope.get("root_path", ""),
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            raw_path=raw_path.decode("latin-1") if raw_path is not None else None,
        )
