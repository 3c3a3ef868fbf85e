"""``iconcdn collections`` — print the prefixes a registry would serve."""

import argparse
import sys

from iconcdn.config import CDNConfig
from iconcdn.registry import CollectionRegistry


def list_collections(args: argparse.Namespace, config: CDNConfig) -> None:
    registry = CollectionRegistry(args.dirs or config.collection_dirs)
    collections = registry.collections()
    if not collections:
        print("No collections found.", file=sys.stderr)
        return
    width = max(len(prefix) for prefix in collections)
    for prefix in sorted(collections):
        print(f"{prefix:<{width}}  {collections[prefix]}")
