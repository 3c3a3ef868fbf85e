"""iconcdn CLI — serve an app or inspect collection directories.

Entry point registered as ``iconcdn`` in ``pyproject.toml``::

    [project.scripts]
    iconcdn = "iconcdn.cli:main"
"""

import argparse
import logging
import sys

from iconcdn.config import CDNConfig
from iconcdn.errors import ConfigurationError


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``iconcdn`` command."""
    parser = argparse.ArgumentParser(
        prog="iconcdn",
        description="iconcdn — icon delivery front door.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- iconcdn run ------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- iconcdn collections ----------------------------------------------
    list_parser = subparsers.add_parser("collections", help="List discovered icon collections")
    list_parser.add_argument(
        "dirs",
        nargs="*",
        help="Collection directories (default: ICONCDN_COLLECTION_DIRS or ./json)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        config = CDNConfig.from_env()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "run":
        from iconcdn.cli._run import run_command

        run_command(args)
    elif args.command == "collections":
        from iconcdn.cli._collections import list_collections

        list_collections(args, config)
