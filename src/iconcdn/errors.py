"""iconcdn exception hierarchy.

Shared across the parser, router, resolver and server so every module
raises and catches the same types.
"""

from dataclasses import dataclass
from enum import StrEnum


class IconCDNError(Exception):
    """Base for all iconcdn-specific errors."""


class ConfigurationError(IconCDNError):
    """Raised when the service configuration is invalid.

    Typically caught at startup, before the first request is served.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(IconCDNError):
    """An error that maps directly to an HTTP status code.

    The router converts these to ``ErrorStatus`` results; anything that
    escapes the pipeline is answered by the ASGI handler.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class ResolverError(HTTPError):
    """A status reported by the icon resolver, forwarded verbatim."""

    def __init__(self, status: int, detail: str = "") -> None:
        super().__init__(status=status, detail=detail)


class ParseErrorKind(StrEnum):
    BAD_FORMAT = "bad_format"
    NOT_FOUND = "not_found"


class ParseError(IconCDNError):
    """A request path that does not decompose into a known route.

    Both kinds surface as 404: the path may be syntactically broken
    (``BAD_FORMAT``) or well-formed but unsupported (``NOT_FOUND``).
    """

    def __init__(self, kind: ParseErrorKind, path: str) -> None:
        self.kind = kind
        self.path = path
        super().__init__(f"{kind.value}: {path!r}")

    @property
    def status(self) -> int:
        return 404
