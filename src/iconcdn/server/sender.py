"""ASGI response sending — translates Response objects to ASGI messages."""

from iconcdn._internal.asgi import Send
from iconcdn.http.response import Response


def body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a Response into ASGI send() calls.

    ``HEAD`` requests keep the headers (including Content-Length) but
    send an empty body. Bodiless statuses get no content headers at all.
    """
    allowed = body_allowed(response.status)

    raw_headers: list[tuple[bytes, bytes]] = []
    if allowed and response.content_type is not None:
        raw_headers.append((b"content-type", response.content_type.encode("latin-1")))
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if allowed else b""
    if allowed:
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )
