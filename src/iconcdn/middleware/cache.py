"""HTTP cache negotiation.

Two halves:

- Inbound: answer ``If-Modified-Since`` with 304 when the client's copy is
  older than the cache window, without routing the request at all.
- Outbound: ``Cache-Control`` / ``Pragma`` for cacheable responses.

Freshness is judged against ``now - ttl``, not against the collection's
real modification time, so a conditional request never costs a registry
lookup. A client only gets a 304 once its timestamp has aged past the
TTL window.
"""

import logging
import time
from collections.abc import Callable
from datetime import UTC
from email.utils import parsedate_to_datetime

from iconcdn.config import CacheConfig
from iconcdn.http.headers import Headers
from iconcdn.http.request import Request
from iconcdn.http.response import Response
from iconcdn.middleware.protocol import Next
from iconcdn.results import NotModified
from iconcdn.server.negotiation import build_response

logger = logging.getLogger("iconcdn.server")

NO_CACHE = "no-cache"


def is_cache_bypassed(headers: Headers) -> bool:
    """True when the client asked to skip caches (``Pragma``/``Cache-Control: no-cache``)."""
    return headers.mentions("pragma", NO_CACHE) or headers.mentions("cache-control", NO_CACHE)


def parse_http_date(value: str) -> float | None:
    """Parse an HTTP date to POSIX seconds, or None if it is not one."""
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.timestamp()


def should_short_circuit(headers: Headers, cache: CacheConfig, now: float) -> bool:
    """Whether a conditional GET can be answered with 304.

    True iff ``If-Modified-Since`` parses to a time ``t`` with
    ``t <= now - ttl``. Unparseable dates are not trusted and never
    short-circuit.
    """
    value = headers.get("if-modified-since")
    if not value:
        return False
    since = parse_http_date(value)
    if since is None:
        return False
    return since <= now - cache.ttl_seconds


def build_cache_headers(cache: CacheConfig) -> tuple[tuple[str, str], ...]:
    """``Cache-Control`` (and ``Pragma`` for public caches)."""
    value = f"{'private' if cache.is_private else 'public'}, max-age={cache.ttl_seconds}"
    if cache.min_refresh_seconds:
        value += f", min-refresh={cache.min_refresh_seconds}"
    headers: tuple[tuple[str, str], ...] = (("Cache-Control", value),)
    if not cache.is_private:
        headers = (*headers, ("Pragma", "cache"))
    return headers


class CacheNegotiator:
    """Middleware that short-circuits conditional GETs with 304.

    Also the source of outgoing cache headers for the response builder::

        negotiator = CacheNegotiator(config.cache)
        headers = negotiator.response_headers(request)
    """

    __slots__ = ("_clock", "_headers", "cache")

    def __init__(self, cache: CacheConfig, *, clock: Callable[[], float] = time.time) -> None:
        self.cache = cache
        self._clock = clock
        self._headers = build_cache_headers(cache)

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        """Cache headers sent regardless of the request (preflight)."""
        return self._headers

    def response_headers(self, request: Request) -> tuple[tuple[str, str], ...]:
        """Cache headers for *request*'s response; empty when the client bypasses caches."""
        if is_cache_bypassed(request.headers):
            return ()
        return self._headers

    def should_short_circuit(self, request: Request) -> bool:
        if is_cache_bypassed(request.headers):
            return False
        return should_short_circuit(request.headers, self.cache, self._clock())

    async def __call__(self, request: Request, next: Next) -> Response:
        if self.should_short_circuit(request):
            logger.debug("304 %s %s", request.method, request.path)
            return build_response(NotModified(), request)
        return await next(request)
