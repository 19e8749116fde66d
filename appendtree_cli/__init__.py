"""
appendtree CLI

Command-line interface for the append-only Merkle tree.

Usage:
    python -m appendtree_cli root 5 10 30
    python -m appendtree_cli root --file keys.txt --trace
    python -m appendtree_cli root 5 10 --expect <hex>
    python -m appendtree_cli demo
    python -m appendtree_cli config --show
"""

__version__ = "0.1.0"
