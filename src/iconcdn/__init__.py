"""iconcdn — the front door of an icon-delivery HTTP endpoint.

Parses icon URLs, negotiates HTTP caching and CORS, and delegates the
actual rendering to a pluggable query engine.

Basic usage::

    from iconcdn import CDNConfig, IconCDN

    app = IconCDN(CDNConfig(collection_dirs=("./json",)), engine=MyEngine())
    app.run()

URL forms::

    /mdi/home.svg     /mdi:home.svg     /mdi-home.svg
    /mdi.json         /mdi/icons.js     /version
"""

__version__ = "1.1.0"
__all__ = [
    "CDNConfig",
    "CacheConfig",
    "ConfigurationError",
    "ErrorStatus",
    "HTTPError",
    "IconCDN",
    "IconCDNError",
    "IconPayload",
    "IconResolver",
    "ParseError",
    "QueryEngine",
    "Request",
    "Response",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import iconcdn`` fast while providing a clean top-level API.
    """
    if name == "IconCDN":
        from iconcdn.app import IconCDN

        return IconCDN

    if name in ("CDNConfig", "CacheConfig"):
        from iconcdn import config as _config

        return getattr(_config, name)

    if name in ("IconPayload", "ErrorStatus"):
        from iconcdn import results as _results

        return getattr(_results, name)

    if name in ("IconResolver", "QueryEngine"):
        from iconcdn import resolver as _resolver

        return getattr(_resolver, name)

    if name == "Request":
        from iconcdn.http.request import Request

        return Request

    if name == "Response":
        from iconcdn.http.response import Response

        return Response

    if name in ("ConfigurationError", "HTTPError", "IconCDNError", "ParseError"):
        from iconcdn import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
