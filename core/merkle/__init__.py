"""
Append-Only Merkle Tree
Incremental root maintenance over an ordered sequence of u64 keys.

This module provides:
- IncrementalMerkleTree: append keys, read the current root
- build_next_level: fold one level into its parent level
- compute_root: batch root over a list of leaf digests
- compute_tree_depth: number of levels for n leaves

Canonical Commitment Rules:
1. Leaf hashing: sha256(key.to_bytes(8, "big"))
2. Parent hashing: sha256(left + right)
3. Padding: a lone trailing node is paired with itself at any level
4. Empty tree: no root (None)
5. Single leaf: root = leaf

Usage:
    from core.merkle import IncrementalMerkleTree
    from core.crypto import to_hex

    tree = IncrementalMerkleTree()
    tree.append(5)
    tree.append(10)
    print(to_hex(tree.root()))
"""
from .merkle_tree import (
    IncrementalMerkleTree,
    build_next_level,
    compute_root,
    compute_tree_depth,
)


__all__ = [
    "IncrementalMerkleTree",
    "build_next_level",
    "compute_root",
    "compute_tree_depth",
]
