"""
Append-Only Merkle Tree Implementation
Incremental maintenance of a Merkle root over an ordered sequence of u64 keys.

This module provides:
- Level fold: build the parent level of any non-empty level
- Batch root computation over a list of leaf digests
- Tree depth for a given number of leaves
- IncrementalMerkleTree: levels kept up to date on every append

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(key.to_bytes(8, "big"))
   - Implemented via core.crypto.hashing.digest_of_key()
2. Parent hashing: parent = sha256(left + right)
3. Padding rule: a lone trailing node is paired with itself at any level
4. Empty tree: no root (None)
5. Single leaf: root = leaf (the leaf digest itself)

Tree Shape Invariants:
- levels[0] holds one leaf per appended key, in append order
- len(levels[i + 1]) == ceil(len(levels[i]) / 2)
- The topmost level holds exactly one digest (the root)
- No level is ever kept above the root

Determinism Notes:
- Leaf order is insertion order; this module never sorts
- Duplicate keys and key 0 are ordinary input
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from core.crypto.hashing import digest_of_key, digest_of_pair, validate_key


logger = logging.getLogger(__name__)


def build_next_level(level: Sequence[bytes]) -> list[bytes]:
    """
    Fold a level into its parent level.

    Scans the level left to right in non-overlapping pairs. A trailing
    node without a right sibling is paired with itself.

    Example: [a, b, c] -> [parent(a, b), parent(c, c)]

    Args:
        level: Non-empty sequence of digests

    Returns:
        New list of ceil(len(level) / 2) parent digests

    Raises:
        ValueError: If level is empty
    """
    if len(level) == 0:
        raise ValueError("Cannot fold an empty level")

    next_level: list[bytes] = []
    for i in range(0, len(level), 2):
        left = level[i]
        right = level[i + 1] if i + 1 < len(level) else left
        next_level.append(digest_of_pair(left, right))

    return next_level


def compute_root(leaves: Sequence[bytes]) -> Optional[bytes]:
    """
    Compute the Merkle root of a sequence of leaf digests in one pass.

    Uses the same fold as IncrementalMerkleTree, so for any append
    sequence `compute_root(tree.leaves) == tree.root()`.

    Args:
        leaves: Sequence of leaf digests. Order matters and is preserved.

    Returns:
        32-byte root, or None if leaves is empty
    """
    if len(leaves) == 0:
        return None

    current_level: list[bytes] = list(leaves)
    while len(current_level) > 1:
        current_level = build_next_level(current_level)

    return current_level[0]


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of levels of a tree with the given number of leaves.

    Leaves and root level are both counted: one leaf gives 1, two give 2,
    three or four give 3. Equals ceil(log2(n)) + 1 for n >= 1.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Number of levels (0 for an empty tree)

    Raises:
        ValueError: If num_leaves is negative
    """
    if num_leaves < 0:
        raise ValueError(f"Leaf count must be non-negative, got {num_leaves}")
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        # Odd levels carry a self-paired node
        n = (n + 1) // 2
        depth += 1

    return depth


class IncrementalMerkleTree:
    """
    Append-only Merkle tree that keeps every level up to date.

    Each append adds one leaf and rebuilds the levels above it from the
    bottom up, stopping at the first single-digest level and dropping any
    level left over from a previous shape. The tree has no internal
    locking; callers sharing one across threads must serialise access.

    Example:
        >>> tree = IncrementalMerkleTree()
        >>> tree.root() is None
        True
        >>> tree.append(5)
        >>> tree.root() == digest_of_key(5)
        True
    """

    def __init__(self) -> None:
        self._levels: list[list[bytes]] = []

    @classmethod
    def from_keys(cls, keys: Iterable[int]) -> "IncrementalMerkleTree":
        """Create a tree and append every key in order."""
        tree = cls()
        tree.extend(keys)
        return tree

    def append(self, key: int) -> None:
        """
        Append a key as the newest leaf and rebuild the levels above it.

        The rebuild runs on a working copy of the level list which then
        replaces the stored one, so no partially rebuilt tree is ever
        visible through the accessors.

        Args:
            key: Unsigned 64-bit integer key

        Raises:
            InvalidKeyException: If key is not a valid u64; the tree is
                                 left unchanged
        """
        leaf = digest_of_key(key)

        levels = list(self._levels)
        if not levels:
            levels.append([leaf])
        else:
            levels[0] = levels[0] + [leaf]

        level_index = 1
        while True:
            below = levels[level_index - 1]

            # The level below is the root: drop anything above it
            if len(below) == 1:
                del levels[level_index:]
                break

            next_level = build_next_level(below)
            if level_index < len(levels):
                levels[level_index] = next_level
            else:
                levels.append(next_level)

            level_index += 1

        self._levels = levels
        logger.debug(
            f"Appended key {key}: leaves={len(levels[0])} height={len(levels)}"
        )

    def extend(self, keys: Iterable[int]) -> None:
        """
        Append several keys in order.

        All keys are validated before the first append, so an invalid key
        leaves the tree unchanged.

        Raises:
            InvalidKeyException: If any key is not a valid u64
        """
        pending = [validate_key(key) for key in keys]
        for key in pending:
            self.append(key)

    def root(self) -> Optional[bytes]:
        """
        Return the current root digest.

        Returns:
            The single digest of the topmost level, or None if no key
            has been appended
        """
        if not self._levels:
            return None
        return self._levels[-1][0]

    @property
    def levels(self) -> tuple[tuple[bytes, ...], ...]:
        """Snapshot of every level, leaves first."""
        return tuple(tuple(level) for level in self._levels)

    @property
    def leaves(self) -> tuple[bytes, ...]:
        """Leaf digests in append order."""
        if not self._levels:
            return ()
        return tuple(self._levels[0])

    @property
    def height(self) -> int:
        """Number of levels, leaf level included (0 when empty)."""
        return len(self._levels)

    @property
    def leaf_count(self) -> int:
        """Number of keys appended so far."""
        if not self._levels:
            return 0
        return len(self._levels[0])

    def __len__(self) -> int:
        return self.leaf_count

    def __repr__(self) -> str:
        root = self.root()
        root_hex = root.hex() if root is not None else None
        return (
            f"{self.__class__.__name__}(leaf_count={self.leaf_count}, "
            f"height={self.height}, root={root_hex!r})"
        )


__all__ = [
    "build_next_level",
    "compute_root",
    "compute_tree_depth",
    "IncrementalMerkleTree",
]
