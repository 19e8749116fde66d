"""
Schemas
File: __init__.py

Purpose: Export the error taxonomy. The presentation model lives in
core.schemas.tree and is imported from there directly, since it depends
on core.crypto.
"""

from .errors import (
    AppendTreeError,
    AppendTreeException,
    ConfigurationException,
    ErrorCodes,
    HexDecodeException,
    InvalidDigestException,
    InvalidKeyException,
    RootMismatchError,
    RootMismatchException,
)

__all__ = [
    "AppendTreeError",
    "AppendTreeException",
    "ConfigurationException",
    "ErrorCodes",
    "HexDecodeException",
    "InvalidDigestException",
    "InvalidKeyException",
    "RootMismatchError",
    "RootMismatchException",
]
