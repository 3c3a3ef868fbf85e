"""Request router.

Maps a parsed path onto one of the dispatch results: redirect, version
banner, or an icon resolved by the injected resolver. Parse failures are
settled here, before any resolver call.
"""

import functools
import logging
from collections.abc import Mapping

import anyio
import anyio.to_thread

from iconcdn.errors import HTTPError, ParseError
from iconcdn.http.request import Request
from iconcdn.resolver import IconResolver
from iconcdn.results import DispatchResult, ErrorStatus, RedirectTo, Resolution, VersionInfo
from iconcdn.routing.parser import ParsedRequest, ParseOutcome, RedirectHome, VersionRequest, parse

logger = logging.getLogger("iconcdn.routing")


class RequestRouter:
    """Route requests to results. Holds no per-request state.

    Args:
        resolver: Collaborator that renders icon routes.
        home_url: ``Location`` for the bare mount point.
        banner: Pre-formatted version banner text.
        mount_path: Deployment prefix stripped before parsing.
        resolver_timeout: Seconds before a resolver call answers 504.
    """

    __slots__ = ("banner", "home_url", "mount_path", "resolver", "resolver_timeout")

    def __init__(
        self,
        resolver: IconResolver,
        *,
        home_url: str,
        banner: str,
        mount_path: str = "",
        resolver_timeout: float = 10.0,
    ) -> None:
        self.resolver = resolver
        self.home_url = home_url
        self.banner = banner
        self.mount_path = mount_path
        self.resolver_timeout = resolver_timeout

    async def dispatch(self, request: Request) -> DispatchResult:
        """Parse the request path and route it."""
        try:
            outcome = parse(request.app_path, self.mount_path)
        except ParseError as exc:
            logger.debug("%s %s -> %d (%s)", request.method, request.path, exc.status, exc.kind)
            return ErrorStatus(exc.status)
        return await self.route(outcome, request.query.to_dict())

    async def route(self, outcome: ParseOutcome, params: Mapping[str, str]) -> DispatchResult:
        match outcome:
            case RedirectHome():
                return RedirectTo(self.home_url)
            case VersionRequest():
                return VersionInfo(self.banner)
            case ParsedRequest():
                return await self._resolve(outcome, params)
        return ErrorStatus(404)

    async def _resolve(self, parsed: ParsedRequest, params: Mapping[str, str]) -> Resolution:
        """Run the blocking resolver in a worker thread, bounded by the timeout."""
        call = functools.partial(
            self.resolver.resolve,
            parsed.prefix,
            parsed.icon_query,
            parsed.extension,
            params,
        )
        result: Resolution | None = None
        try:
            with anyio.move_on_after(self.resolver_timeout) as scope:
                result = await anyio.to_thread.run_sync(call, abandon_on_cancel=True)
        except HTTPError as exc:
            logger.debug("Resolver raised %s for %s:%s", exc, parsed.prefix, parsed.icon_query)
            return ErrorStatus(exc.status)
        except Exception:
            logger.exception(
                "Resolver failed for %s:%s.%s", parsed.prefix, parsed.icon_query, parsed.extension
            )
            return ErrorStatus(500)

        if scope.cancelled_caught:
            logger.error(
                "Resolver timed out after %.1fs for %s:%s.%s",
                self.resolver_timeout,
                parsed.prefix,
                parsed.icon_query,
                parsed.extension,
            )
            return ErrorStatus(504)

        if result is None:
            logger.error(
                "Resolver returned no result for %s:%s.%s",
                parsed.prefix,
                parsed.icon_query,
                parsed.extension,
            )
            return ErrorStatus(500)

        if isinstance(result, ErrorStatus):
            logger.debug(
                "Resolver answered %d for %s:%s.%s",
                result.status,
                parsed.prefix,
                parsed.icon_query,
                parsed.extension,
            )
        return result
