"""Routing — path grammar and dispatch.

``parse`` turns a request path into a ``ParsedRequest`` (or one of the
fixed routes); ``RequestRouter`` turns that into a ``DispatchResult``.
"""

from iconcdn.routing.parser import (
    REDIRECT_HOME,
    VERSION_REQUEST,
    ParsedRequest,
    RedirectHome,
    VersionRequest,
    parse,
)
from iconcdn.routing.router import RequestRouter

__all__ = [
    "REDIRECT_HOME",
    "VERSION_REQUEST",
    "ParsedRequest",
    "RedirectHome",
    "RequestRouter",
    "VersionRequest",
    "parse",
]
