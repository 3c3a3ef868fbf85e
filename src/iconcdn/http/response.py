"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace

PLAIN_TEXT = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    ``content_type`` is ``None`` for responses that must not describe a
    body (304, 301, preflight).
    """

    body: str | bytes = b""
    status: int = 200
    content_type: str | None = PLAIN_TEXT
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Iterable[tuple[str, str]]) -> "Response":
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers))

    def with_content_type(self, content_type: str | None) -> "Response":
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Inspection --

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or None."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None

    def has_header(self, name: str) -> bool:
        return self.header(name) is not None

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body
