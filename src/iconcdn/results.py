"""Dispatch results — the tagged union handed from routing to the response builder.

Every variant is a frozen dataclass. A resolver answers with either an
``IconPayload`` or an ``ErrorStatus``; the type, not a numeric check,
tells the two apart.
"""

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class IconPayload:
    """A rendered icon, collection script, or JSON document."""

    body: bytes
    content_type: str
    filename: str | None = None
    # Collection file mtime (POSIX seconds), when the registry knows it
    last_modified: float | None = None


@dataclass(frozen=True, slots=True)
class ErrorStatus:
    """A terminal HTTP status with no payload."""

    status: int


@dataclass(frozen=True, slots=True)
class RedirectTo:
    """Permanent redirect."""

    location: str
    status: int = 301


@dataclass(frozen=True, slots=True)
class VersionInfo:
    """Plain-text version banner."""

    text: str


@dataclass(frozen=True, slots=True)
class NotModified:
    """Conditional GET answered from the client's cache."""


Resolution: TypeAlias = IconPayload | ErrorStatus
DispatchResult: TypeAlias = IconPayload | ErrorStatus | RedirectTo | VersionInfo | NotModified
