"""Service configuration.

CDNConfig is a frozen dataclass — immutable after creation, built once at
startup and passed explicitly to every component. No global lookups.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from iconcdn.errors import ConfigurationError

_ENV_PREFIX = "ICONCDN_"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """HTTP cache policy shared by every request. Never mutated."""

    ttl_seconds: int = 604800  # 7 days
    min_refresh_seconds: int = 86400  # 1 day
    is_private: bool = False


@dataclass(frozen=True, slots=True)
class CDNConfig:
    """Service configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = CDNConfig(collection_dirs=("./json",), cache_ttl=3600)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 0  # 0 = auto-detect from CPU count
    log_level: str = "info"

    # Deployment prefix stripped before routing (e.g. "/icons")
    mount_path: str = ""

    # Directories holding <prefix>.json collection files
    collection_dirs: tuple[str | Path, ...] = ("json",)

    # Cache
    cache_ttl: int = 604800
    cache_min_refresh: int = 86400
    cache_private: bool = False

    # Fixed responses
    home_url: str = "https://simplesvg.com/"
    product_name: str = "SimpleSVG CDN"
    runtime_label: str = "Python"
    region_file: str | Path | None = "region.txt"

    # Seconds to wait for the resolver before answering 504
    resolver_timeout: float = 10.0

    @property
    def cache(self) -> CacheConfig:
        return CacheConfig(
            ttl_seconds=self.cache_ttl,
            min_refresh_seconds=self.cache_min_refresh,
            is_private=self.cache_private,
        )

    def validate(self) -> None:
        """Raise ``ConfigurationError`` for values the server cannot honour."""
        if self.cache_ttl < 0:
            msg = f"cache_ttl must be >= 0, got {self.cache_ttl}"
            raise ConfigurationError(msg)
        if self.cache_min_refresh < 0:
            msg = f"cache_min_refresh must be >= 0, got {self.cache_min_refresh}"
            raise ConfigurationError(msg)
        if self.resolver_timeout <= 0:
            msg = f"resolver_timeout must be > 0, got {self.resolver_timeout}"
            raise ConfigurationError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CDNConfig":
        """Build a config from ``ICONCDN_*`` environment variables.

        Unset variables keep their defaults. ``ICONCDN_COLLECTION_DIRS`` is a
        ``os.pathsep``-separated list.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        def lookup(name: str) -> str | None:
            return env.get(_ENV_PREFIX + name)

        for name in ("host", "mount_path", "home_url", "product_name", "runtime_label", "log_level"):
            raw = lookup(name.upper())
            if raw is not None:
                values[name] = raw

        for name in ("port", "workers", "cache_ttl", "cache_min_refresh"):
            raw = lookup(name.upper())
            if raw is not None:
                values[name] = _parse_int(name, raw)

        for name in ("debug", "cache_private"):
            raw = lookup(name.upper())
            if raw is not None:
                values[name] = raw.strip().lower() in _TRUTHY

        raw = lookup("RESOLVER_TIMEOUT")
        if raw is not None:
            try:
                values["resolver_timeout"] = float(raw)
            except ValueError as exc:
                msg = f"{_ENV_PREFIX}RESOLVER_TIMEOUT must be a number, got {raw!r}"
                raise ConfigurationError(msg) from exc

        raw = lookup("COLLECTION_DIRS")
        if raw is not None:
            values["collection_dirs"] = tuple(p for p in raw.split(os.pathsep) if p)

        raw = lookup("REGION_FILE")
        if raw is not None:
            values["region_file"] = raw or None

        return cls(**values)  # type: ignore[arg-type]


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"{_ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}"
        raise ConfigurationError(msg) from exc
