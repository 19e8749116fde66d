"""
Schemas
File: tree.py

Purpose: Presentation model for an IncrementalMerkleTree.
Digests are rendered as hex strings; the model is a display snapshot,
not a storage format.
"""

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.crypto.hashing import to_hex

if TYPE_CHECKING:
    from core.merkle.merkle_tree import IncrementalMerkleTree


class TraceEntry(BaseModel):
    """Root after a single append."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    key: int = Field(..., ge=0, description="Appended key")
    root: str = Field(..., description="Root digest (hex) after the append")


class TreeSummary(BaseModel):
    """
    Snapshot of a tree's shape and root for CLI output.

    `levels` and `trace` are only populated when requested.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    leaf_count: int = Field(..., ge=0, description="Number of appended keys")
    height: int = Field(..., ge=0, description="Number of levels, leaves included")
    root: Optional[str] = Field(
        default=None,
        description="Root digest (hex), None for an empty tree",
    )
    levels: Optional[list[list[str]]] = Field(
        default=None,
        description="Every level as hex digests, leaves first",
    )
    trace: Optional[list[TraceEntry]] = Field(
        default=None,
        description="Root after each append, in append order",
    )

    @classmethod
    def from_tree(
        cls,
        tree: "IncrementalMerkleTree",
        include_levels: bool = False,
        hex_prefix: bool = False,
        trace: Optional[list[TraceEntry]] = None,
    ) -> "TreeSummary":
        """Build a summary from the tree's current state."""
        root = tree.root()
        levels = None
        if include_levels:
            levels = [
                [to_hex(digest, prefix=hex_prefix) for digest in level]
                for level in tree.levels
            ]
        return cls(
            leaf_count=tree.leaf_count,
            height=tree.height,
            root=to_hex(root, prefix=hex_prefix) if root is not None else None,
            levels=levels,
            trace=trace,
        )
