"""``iconcdn run`` — resolve an app and serve it."""

import argparse
import sys

from iconcdn.cli._resolve import resolve_app
from iconcdn.errors import ConfigurationError


def run_command(args: argparse.Namespace) -> None:
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        app.run(host=args.host, port=args.port)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
