"""Response building — maps dispatch results to Response objects.

isinstance-based dispatch over the ``DispatchResult`` union, no magic,
fully predictable.
"""

import hashlib
from email.utils import formatdate

from iconcdn.http.request import Request
from iconcdn.http.response import PLAIN_TEXT, Response
from iconcdn.results import (
    DispatchResult,
    ErrorStatus,
    IconPayload,
    NotModified,
    RedirectTo,
    VersionInfo,
)

# Statuses that carry a human-readable body; every other error is empty
ERROR_BODIES: dict[int, bytes] = {
    400: b"Bad request",
    404: b"Not found",
}


def etag_for(body: bytes) -> str:
    """Content hash used as the ETag. Only stability matters, not secrecy."""
    return hashlib.md5(body, usedforsecurity=False).hexdigest()


def http_date(timestamp: float) -> str:
    """Format POSIX seconds as an HTTP date (``Sun, 06 Nov 1994 08:49:37 GMT``)."""
    return formatdate(timestamp, usegmt=True)


def error_response(status: int) -> Response:
    body = ERROR_BODIES.get(status, b"")
    return Response(body=body, status=status, content_type=PLAIN_TEXT if body else None)


def icon_response(
    payload: IconPayload,
    request: Request,
    cache_headers: tuple[tuple[str, str], ...] = (),
) -> Response:
    response = Response(body=payload.body, status=200, content_type=payload.content_type)
    if payload.last_modified is not None:
        response = response.with_header("Last-Modified", http_date(payload.last_modified))
    response = response.with_headers(cache_headers).with_header("ETag", etag_for(payload.body))
    if payload.filename is not None and request.query.wants_download:
        response = response.with_header(
            "Content-Disposition", f'attachment; filename="{payload.filename}"'
        )
    return response


def build_response(
    result: DispatchResult,
    request: Request,
    cache_headers: tuple[tuple[str, str], ...] = (),
) -> Response:
    """Convert a dispatch result to a Response.

    Dispatch order:

    1. ``IconPayload``  -> 200, payload content type, ETag, Last-Modified,
                           cache headers, optional Content-Disposition
    2. ``ErrorStatus``  -> that status; short text body for 400/404 only
    3. ``RedirectTo``   -> 301 with Location, empty body
    4. ``VersionInfo``  -> 200, text/plain banner
    5. ``NotModified``  -> 304, no body, no content headers
    """
    match result:
        case IconPayload():
            return icon_response(result, request, cache_headers)
        case ErrorStatus(status=status):
            return error_response(status)
        case RedirectTo(location=location, status=status):
            return Response(body=b"", status=status, content_type=None).with_header(
                "Location", location
            )
        case VersionInfo(text=text):
            return Response(body=text, status=200, content_type=PLAIN_TEXT)
        case NotModified():
            return Response(body=b"", status=304, content_type=None)
    msg = f"Cannot build a response from {type(result).__name__}"
    raise TypeError(msg)
