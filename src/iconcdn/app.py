"""iconcdn application class.

Mutable during setup (middleware registration). Frozen at runtime when
``app.run()`` or ``__call__()`` is first invoked.
"""

import logging
import os
import threading
import time
from collections.abc import Callable, Mapping
from typing import Any

from iconcdn import __version__
from iconcdn._internal.asgi import Receive, Scope, Send
from iconcdn.config import CDNConfig
from iconcdn.errors import ConfigurationError
from iconcdn.middleware.cache import CacheNegotiator
from iconcdn.middleware.cors import CORSMiddleware
from iconcdn.middleware.protocol import Middleware
from iconcdn.registry import CollectionRegistry
from iconcdn.resolver import IconResolver, QueryEngine, RegistryResolver
from iconcdn.routing.router import RequestRouter
from iconcdn.server.handler import handle_request
from iconcdn.version import format_banner, resolve_region

logger = logging.getLogger("iconcdn.server")

_UNSET: Any = object()


class IconCDN:
    """The icon CDN ASGI application.

    Either pass a ready ``resolver`` or a ``engine`` to be combined with a
    ``CollectionRegistry`` over ``config.collection_dirs``::

        app = IconCDN(CDNConfig(collection_dirs=("./json",)), engine=MyEngine())

    The pipeline, outermost first: CORS (and preflight), user middleware,
    conditional GET, router.

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread builds the router, even when several workers call
        ``__call__()`` concurrently on the first request.
    """

    __slots__ = (
        "_cache",
        "_clock",
        "_engine",
        "_environ",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_region",
        "_registry",
        "_resolver",
        "_router",
        "config",
    )

    def __init__(
        self,
        config: CDNConfig | None = None,
        *,
        resolver: IconResolver | None = None,
        engine: QueryEngine | None = None,
        registry: CollectionRegistry | None = None,
        region: str | None = _UNSET,
        environ: Mapping[str, str] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config: CDNConfig = config or CDNConfig()
        self._resolver = resolver
        self._engine = engine
        self._registry = registry
        self._region = region
        self._environ = environ
        self._clock = clock
        self._middleware_list: list[Middleware] = []
        self._frozen: bool = False
        self._freeze_lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._router: RequestRouter | None = None
        self._cache: CacheNegotiator | None = None
        self._middleware: tuple[Middleware, ...] = ()

    # -- Setup --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware between CORS handling and the conditional-GET check."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    @property
    def registry(self) -> CollectionRegistry:
        """The collection registry, created from config on first access."""
        if self._registry is None:
            self._registry = CollectionRegistry(self.config.collection_dirs)
        return self._registry

    @property
    def region(self) -> str | None:
        if self._region is _UNSET:
            environ = os.environ if self._environ is None else self._environ
            self._region = resolve_region(environ, self.config.region_file)
        return self._region

    @property
    def banner(self) -> str:
        return format_banner(
            self.config.product_name, __version__, self.config.runtime_label, self.region
        )

    # -- Runtime --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Build the app and serve it with pounce."""
        self._ensure_frozen()

        from iconcdn.server.production import run_server

        run_server(
            self,
            host=host or self.config.host,
            port=port or self.config.port,
            workers=self.config.workers,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._router is not None
        assert self._cache is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            cache_headers=self._cache.response_headers,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol, freezing the app at startup."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except ConfigurationError as exc:
                    logger.error("Startup failed: %s", exc)
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                logger.info("%s ready", self.banner)
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Freeze --

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot modify the app after it has started serving requests."
            raise RuntimeError(msg)

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        self.config.validate()

        resolver = self._resolver
        if resolver is None:
            if self._engine is None:
                msg = "IconCDN needs either a resolver or a query engine."
                raise ConfigurationError(msg)
            resolver = RegistryResolver(self.registry, self._engine)

        cache = self.config.cache
        self._cache = CacheNegotiator(cache, clock=self._clock)
        self._router = RequestRouter(
            resolver,
            home_url=self.config.home_url,
            banner=self.banner,
            mount_path=self.config.mount_path,
            resolver_timeout=self.config.resolver_timeout,
        )
        self._middleware = (
            CORSMiddleware(cache),
            *self._middleware_list,
            self._cache,
        )
        self._frozen = True
