"""
CLI Root Command

Append keys to a fresh tree and print the resulting root.

Usage:
    appendtree root 5 10 30 [--trace] [--levels] [--json]
    appendtree root --file keys.txt [--expect <hex>]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Iterable

from core.config.runtime import get_default_config
from core.crypto.hashing import from_hex, to_hex, validate_key
from core.merkle.merkle_tree import IncrementalMerkleTree
from core.schemas.errors import InvalidKeyException, RootMismatchException
from core.schemas.tree import TraceEntry, TreeSummary


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_ROOT_MISMATCH = 2


def parse_key(text: str) -> int:
    """
    Parse a key from the command line.

    Accepts decimal ("42", leading zeros allowed) or 0x-prefixed hex ("0x2a").

    Raises:
        InvalidKeyException: If the text is not a u64
    """
    stripped = text.strip()
    try:
        if stripped[:2].lower() == "0x":
            key = int(stripped[2:], 16)
        else:
            key = int(stripped, 10)
    except ValueError as e:
        raise InvalidKeyException(f"Not an integer key: {text!r}", key=text) from e
    return validate_key(key)


def read_keys_file(path: Path) -> list[int]:
    """
    Read keys from a text file, one per line.

    Blank lines and lines starting with '#' are skipped.
    """
    keys: list[int] = []
    with open(path, encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            text = line.strip()
            if not text or text.startswith("#"):
                continue
            try:
                keys.append(parse_key(text))
            except InvalidKeyException as e:
                e.details["line"] = line_no
                e.details["path"] = str(path)
                raise
    return keys


def collect_keys(args: Namespace) -> list[int]:
    """Keys from --file (first) followed by positional keys."""
    keys: list[int] = []
    if getattr(args, "file", None):
        keys.extend(read_keys_file(Path(args.file)))
    keys.extend(parse_key(text) for text in (args.keys or []))
    return keys


def build_tree(
    keys: Iterable[int],
    hex_prefix: bool = False,
    trace: bool = False,
) -> tuple[IncrementalMerkleTree, list[TraceEntry] | None]:
    """Append keys to a new tree, optionally recording the root after each."""
    tree = IncrementalMerkleTree()
    entries: list[TraceEntry] | None = [] if trace else None
    for key in keys:
        tree.append(key)
        if entries is not None:
            entries.append(TraceEntry(key=key, root=to_hex(tree.root(), prefix=hex_prefix)))
    return tree, entries


def check_expected_root(tree: IncrementalMerkleTree, expected_hex: str) -> None:
    """
    Compare the tree root with an expected hex digest.

    Raises:
        RootMismatchException: If the roots differ or the tree is empty
        HexDecodeException: If expected_hex is not valid hex
    """
    expected = from_hex(expected_hex)
    actual = tree.root()
    if actual != expected:
        raise RootMismatchException(
            "Computed root does not match expected root",
            expected_root=to_hex(expected),
            actual_root=to_hex(actual) if actual is not None else None,
        )


def root_cmd(args: Namespace) -> int:
    """Execute the root command."""
    config = getattr(args, "cli_config", None) or get_default_config()
    hex_prefix = config.display.hex_prefix
    as_json = args.json or config.display.output_format == "json"

    try:
        keys = collect_keys(args)
    except InvalidKeyException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Building tree from {len(keys)} keys")
    tree, trace = build_tree(keys, hex_prefix=hex_prefix, trace=args.trace)
    summary = TreeSummary.from_tree(
        tree,
        include_levels=args.levels,
        hex_prefix=hex_prefix,
        trace=trace,
    )

    mismatch: RootMismatchException | None = None
    if args.expect:
        try:
            check_expected_root(tree, args.expect)
        except RootMismatchException as e:
            mismatch = e

    if as_json:
        output = summary.model_dump(exclude_none=True)
        output["root"] = summary.root
        if args.expect:
            output["match"] = mismatch is None
            if mismatch is not None:
                output["error"] = mismatch.to_error_model().model_dump()
        print(json.dumps(output, indent=2))
    else:
        print_human(summary)
        if mismatch is not None:
            print(f"Root mismatch: expected {mismatch.expected_root}", file=sys.stderr)
        elif args.expect:
            print("Root matches expected value")

    return EXIT_ROOT_MISMATCH if mismatch is not None else EXIT_SUCCESS


def print_human(summary: TreeSummary) -> None:
    """Print a summary in human-readable form."""
    if summary.trace:
        for entry in summary.trace:
            print(f"append {entry.key}: {entry.root}")
    if summary.levels:
        for index, level in enumerate(summary.levels):
            print(f"level {index}: {' '.join(level)}")
    print(f"Leaves: {summary.leaf_count}")
    print(f"Height: {summary.height}")
    print(f"Root: {summary.root if summary.root is not None else '(empty tree)'}")
