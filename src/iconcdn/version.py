"""Version banner and deployment region.

The region is resolved once at startup and injected into the router; the
request path never touches the environment or the filesystem.
"""

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger("iconcdn.version")

REGION_ENV_VAR = "region"
REGION_PATTERN = re.compile(r"^[a-z0-9_-]+$")
REGION_MAX_LENGTH = 10


def read_region_file(path: str | Path) -> str | None:
    """Return the region stored in *path*, or None if absent or untrusted."""
    file_path = Path(path)
    try:
        region = file_path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.warning("Cannot read region file %s: %s", file_path, exc)
        return None
    if len(region) <= REGION_MAX_LENGTH and REGION_PATTERN.match(region):
        return region
    logger.warning("Ignoring region file %s: unexpected content", file_path)
    return None


def resolve_region(
    environ: Mapping[str, str] | None = None,
    region_file: str | Path | None = None,
) -> str | None:
    """Find the deployment region.

    The ``region`` environment variable wins and is used verbatim. Otherwise
    the region file is consulted, and only accepted when it is a short
    lowercase identifier.
    """
    env = os.environ if environ is None else environ
    value = env.get(REGION_ENV_VAR)
    if value is not None:
        return value
    if region_file is None:
        return None
    return read_region_file(region_file)


def format_banner(product: str, version: str, runtime_label: str, region: str | None) -> str:
    """``"{product} version {version} ({runtime}[, {region}])"``."""
    suffix = f", {region}" if region is not None else ""
    return f"{product} version {version} ({runtime_label}{suffix})"
