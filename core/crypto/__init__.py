"""
Core cryptographic utilities.

Provides the SHA-256 digest primitives used by the append-only Merkle tree.
"""
from .hashing import (
    DIGEST_SIZE,
    KEY_MAX,
    KEY_SIZE,
    sha256,
    validate_key,
    key_to_bytes,
    digest_of_key,
    digest_of_pair,
    to_hex,
    from_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "KEY_MAX",
    "KEY_SIZE",
    "sha256",
    "validate_key",
    "key_to_bytes",
    "digest_of_key",
    "digest_of_pair",
    "to_hex",
    "from_hex",
]
