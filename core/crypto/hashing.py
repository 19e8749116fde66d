"""
Hashing Utilities
Digest primitives for the append-only Merkle tree.

This module provides:
- SHA-256 hashing for raw bytes
- Leaf digests for u64 keys (8-byte big-endian encoding)
- Parent digests for ordered pairs of child digests
- Hex encoding/decoding for display

Determinism Notes:
- Every call hashes with a fresh hasher; no state is kept between calls
- Pair hashing is order-sensitive: digest_of_pair(a, b) != digest_of_pair(b, a)
"""
from __future__ import annotations

import hashlib

from core.schemas.errors import (
    HexDecodeException,
    InvalidDigestException,
    InvalidKeyException,
)


# Size in bytes of every digest produced by sha256()
DIGEST_SIZE: int = 32

# Keys are unsigned 64-bit integers
KEY_SIZE: int = 8
KEY_MAX: int = 2**64 - 1


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def validate_key(key: int) -> int:
    """
    Check that a key is an unsigned 64-bit integer.

    Args:
        key: Candidate key

    Returns:
        The key, unchanged

    Raises:
        InvalidKeyException: If key is not an int (bools are rejected)
                             or falls outside [0, 2**64 - 1]
    """
    if isinstance(key, bool) or not isinstance(key, int):
        raise InvalidKeyException(
            f"Key must be an integer, got {type(key).__name__}",
            key=key,
        )
    if key < 0 or key > KEY_MAX:
        raise InvalidKeyException(
            f"Key {key} is outside the unsigned 64-bit range",
            key=key,
        )
    return key


def key_to_bytes(key: int) -> bytes:
    """Serialize a u64 key to its 8-byte big-endian representation."""
    return validate_key(key).to_bytes(KEY_SIZE, "big")


def digest_of_key(key: int) -> bytes:
    """
    Compute the leaf digest of a key.

    Rule: leaf = sha256(key.to_bytes(8, "big"))

    Args:
        key: Unsigned 64-bit integer key

    Returns:
        32-byte leaf digest

    Raises:
        InvalidKeyException: If key is not a valid u64

    Example:
        >>> digest_of_key(1) == sha256(b"\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01")
        True
    """
    return sha256(key_to_bytes(key))


def digest_of_pair(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent digest of two child digests.

    Rule: parent = sha256(left || right)

    The left digest's 32 bytes come first; swapping the operands
    yields a different parent.

    Args:
        left: Left child digest (32 bytes)
        right: Right child digest (32 bytes)

    Returns:
        32-byte parent digest

    Raises:
        InvalidDigestException: If either child is not exactly 32 bytes
    """
    for side, value in (("left", left), ("right", right)):
        if not isinstance(value, (bytes, bytearray)) or len(value) != DIGEST_SIZE:
            raise InvalidDigestException(
                f"{side} digest must be {DIGEST_SIZE} bytes",
                actual_length=len(value) if isinstance(value, (bytes, bytearray)) else None,
            )
    return sha256(bytes(left) + bytes(right))


def to_hex(data: bytes, prefix: bool = False) -> str:
    """
    Convert bytes to a lowercase hexadecimal string.

    Two hex characters per byte, most-significant byte first.

    Args:
        data: Raw bytes
        prefix: Prepend "0x" when True

    Returns:
        Hex string (e.g., "1234abcd" or "0x1234abcd")

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        'deadbeef'
    """
    encoded = data.hex()
    return "0x" + encoded if prefix else encoded


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string (optional 0x prefix) to bytes.

    Args:
        hex_string: Hex string, with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        HexDecodeException: If the string has odd length or contains
                            invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    hex_content = hex_string.strip()
    if hex_content[:2].lower() == "0x":
        hex_content = hex_content[2:]

    # Validate even length
    if len(hex_content) % 2 != 0:
        raise HexDecodeException(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    # Decode (raises ValueError for invalid hex chars)
    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise HexDecodeException(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "DIGEST_SIZE",
    "KEY_SIZE",
    "KEY_MAX",
    "sha256",
    "validate_key",
    "key_to_bytes",
    "digest_of_key",
    "digest_of_pair",
    "to_hex",
    "from_hex",
]
