"""Serve an IconCDN app with pounce.

Pounce's ``run()`` takes an import string, but the CLI holds a live
``IconCDN`` object, so ``pounce.Server`` is used directly with the ASGI
callable. Requires the ``server`` extra.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from iconcdn.errors import ConfigurationError

if TYPE_CHECKING:
    from iconcdn.app import IconCDN


def run_server(
    app: IconCDN,
    host: str = "127.0.0.1",
    port: int = 8000,
    *,
    workers: int = 0,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """Start a pounce server for *app* and block until it exits.

    Args:
        app: The IconCDN application.
        host: Bind host address.
        port: Bind port number.
        workers: Worker count (0 = auto-detect). Forced to 1 with reload.
        reload: Restart on file changes (development only).
        log_level: debug, info, warning, error or critical.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving requires pounce. Install it with: pip install iconcdn[server]"
        raise ConfigurationError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=1 if reload else workers,
        reload=reload,
        log_level=log_level,
    )
    server = Server(config, app)
    server.run()
