"""ASGI handler — translates ASGI scope/messages to iconcdn types.

The only component that touches raw ASGI directly. Converts the scope to
a typed Request, runs it through middleware and the router, and sends
the Response back through ASGI send().
"""

import logging
from collections.abc import Callable
from typing import Any, TypeAlias

from iconcdn._internal.asgi import Receive, Scope, Send
from iconcdn.errors import HTTPError
from iconcdn.http.request import Request
from iconcdn.http.response import Response
from iconcdn.middleware.protocol import Next
from iconcdn.routing.router import RequestRouter
from iconcdn.server.negotiation import build_response, error_response
from iconcdn.server.sender import send_response

logger = logging.getLogger("iconcdn.server")

CacheHeaders: TypeAlias = Callable[[Request], tuple[tuple[str, str], ...]]


async def handle_request(
    scope: Scope,
    receive: Receive,  # noqa: ARG001
    send: Send,
    *,
    router: RequestRouter,
    middleware: tuple[Callable[..., Any], ...],
    cache_headers: CacheHeaders,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    async def dispatch(req: Request) -> Response:
        result = await router.dispatch(req)
        return build_response(result, req, cache_headers(req))

    # Wrap middleware around the dispatch, first registered is outermost.
    # Each layer answers its own failures with an error response.
    handler: Next = _guard(dispatch)
    for mw in reversed(middleware):
        outer = handler

        async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> Response:
            return await _mw(req, _next)

        handler = _guard(make_next)

    response = await handler(request)

    logger.debug("%d %s %s", response.status, request.method, request.path)
    await send_response(response, send, head=request.method == "HEAD")


def _guard(handler: Next) -> Next:
    """Turn exceptions escaping *handler* into error responses."""

    async def guarded(request: Request) -> Response:
        try:
            return await handler(request)
        except HTTPError as exc:
            logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
            return error_response(exc.status)
        except Exception:
            logger.exception("500 %s %s", request.method, request.path)
            return error_response(500)

    return guarded
