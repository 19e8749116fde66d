"""
CLI Demo Command

Appends keys 5 and 10, prints the root, appends 30 and prints the new root.

Usage:
    appendtree demo [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from core.config.runtime import get_default_config
from core.crypto.hashing import to_hex
from core.merkle.merkle_tree import IncrementalMerkleTree


EXIT_SUCCESS = 0

DEMO_KEYS = (5, 10)
DEMO_NEXT_KEY = 30


def demo_cmd(args: Namespace) -> int:
    """Execute the demo command."""
    config = getattr(args, "cli_config", None) or get_default_config()
    hex_prefix = config.display.hex_prefix

    tree = IncrementalMerkleTree()
    tree.extend(DEMO_KEYS)
    root = to_hex(tree.root(), prefix=hex_prefix)

    tree.append(DEMO_NEXT_KEY)
    new_root = to_hex(tree.root(), prefix=hex_prefix)

    if args.json or config.display.output_format == "json":
        print(json.dumps({"root": root, "new_root": new_root}, indent=2))
    else:
        print(f"Root: {root}")
        print(f"New root: {new_root}")

    return EXIT_SUCCESS
