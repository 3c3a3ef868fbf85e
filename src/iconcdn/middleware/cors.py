"""CORS middleware.

Icons are embedded from any site, so every origin is allowed and echoed
back with credentials. ``OPTIONS`` is answered here as a preflight and
never reaches routing.
"""

from iconcdn.config import CacheConfig
from iconcdn.http.request import Request
from iconcdn.http.response import Response
from iconcdn.middleware.cache import build_cache_headers
from iconcdn.middleware.protocol import Next

ALLOWED_METHODS = ("GET", "POST", "OPTIONS")


class CORSMiddleware:
    """Echo ``Origin`` on every response and answer preflight requests.

    Handles:
    - Any request with ``Origin``: ``Access-Control-Allow-Origin`` (echoed),
      ``Access-Control-Allow-Credentials: true`` and
      ``Access-Control-Max-Age`` set to the cache TTL. This includes 304s
      and error responses.
    - ``OPTIONS``: 200 with an empty body and cache headers.
      ``Access-Control-Allow-Methods`` only when the browser sent
      ``Access-Control-Request-Method``; ``Access-Control-Allow-Headers``
      echoes ``Access-Control-Request-Headers`` verbatim when present.
    """

    __slots__ = ("cache",)

    def __init__(self, cache: CacheConfig) -> None:
        self.cache = cache

    def origin_headers(self, origin: str) -> tuple[tuple[str, str], ...]:
        return (
            ("Access-Control-Allow-Origin", origin),
            ("Access-Control-Allow-Credentials", "true"),
            ("Access-Control-Max-Age", str(self.cache.ttl_seconds)),
        )

    def preflight_response(self, request: Request) -> Response:
        """Build the response to an ``OPTIONS`` request (without origin headers)."""
        response = Response(body=b"", status=200, content_type=None)

        if "access-control-request-method" in request.headers:
            response = response.with_header("Access-Control-Allow-Methods", ", ".join(ALLOWED_METHODS))

        requested_headers = request.headers.get("access-control-request-headers")
        if requested_headers is not None:
            response = response.with_header("Access-Control-Allow-Headers", requested_headers)

        return response.with_headers(build_cache_headers(self.cache))

    async def __call__(self, request: Request, next: Next) -> Response:
        if request.is_preflight:
            response = self.preflight_response(request)
        else:
            response = await next(request)

        origin = request.origin
        if origin is None:
            return response
        # Origin headers go first
        return Response(
            body=response.body,
            status=response.status,
            content_type=response.content_type,
            headers=(*self.origin_headers(origin), *response.headers),
        )
