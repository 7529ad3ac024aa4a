"""
Hashing Utilities

Hash functions suitable for use as a tree's HashFunction, plus hex
encoding/decoding with an optional 0x prefix.

This module provides:
- SHA-256 and SHA3-256 hashing for raw bytes
- Leaf hashing for raw data (bytes or UTF-8 text)
- A name -> hash function registry backed by hashlib
- Hex encoding/decoding

Notes:
- Trees never hash their leaves; callers hash raw data with hash_leaf()
  (or any other function) before building a tree.
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Callable

from merkletree.crypto.buffers import is_hex_str
from merkletree.schemas.errors import ConfigurationException, HexDecodingException


HashFunction = Callable[[bytes], bytes]


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


def sha3_256(data: bytes) -> bytes:
    """
    Compute SHA3-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA3-256 digest
    """
    return hashlib.sha3_256(data).digest()


def double_sha256(data: bytes) -> bytes:
    """sha256(sha256(data)), as used for Bitcoin transaction ids."""
    return sha256(sha256(data))


def _hashlib_function(name: str) -> HashFunction:
    def _hash(data: bytes) -> bytes:
        return hashlib.new(name, data).digest()

    _hash.__name__ = name
    return _hash


# Algorithms that may be selected by name (CLI, config files)
HASH_FUNCTIONS: dict[str, HashFunction] = {
    "sha256": sha256,
    "sha3_256": sha3_256,
    "sha512": _hashlib_function("sha512"),
    "sha3_512": _hashlib_function("sha3_512"),
    "sha1": _hashlib_function("sha1"),
    "blake2b": _hashlib_function("blake2b"),
    "blake2s": _hashlib_function("blake2s"),
    "md5": _hashlib_function("md5"),
}


def get_hash_function(name: str) -> HashFunction:
    """
    Look up a hash function by name.

    Names are case-insensitive and dashes are accepted in place of
    underscores ("SHA3-256" resolves to "sha3_256").

    Raises:
        ConfigurationException: If the algorithm is unknown
    """
    key = name.strip().lower().replace("-", "_")
    try:
        return HASH_FUNCTIONS[key]
    except KeyError:
        raise ConfigurationException(
            f"Unknown hash algorithm: {name!r}",
            details={"available": sorted(HASH_FUNCTIONS)},
        ) from None


def hash_leaf(data: bytes | str, hash_fn: HashFunction = sha256) -> bytes:
    """
    Hash raw data into a leaf value.

    Strings are encoded as UTF-8 before hashing.

    Example:
        >>> leaves = [hash_leaf(x, sha3_256) for x in "abc"]
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hash_fn(data)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + bytes(data).hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string (0x prefix optional) to bytes.

    Raises:
        HexDecodingException: If the string has invalid characters
            or an odd number of digits

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not is_hex_str(hex_string):
        raise HexDecodingException(
            f"Invalid hex string: {str(hex_string)[:20]!r}",
        )

    hex_content = hex_string[2:] if hex_string.startswith("0x") else hex_string

    if len(hex_content) % 2 != 0:
        raise HexDecodingException(
            f"Hex string must have an even number of digits, "
            f"got {len(hex_content)}",
        )

    return bytes.fromhex(hex_content)


__all__ = [
    "HashFunction",
    "HASH_FUNCTIONS",
    "sha256",
    "sha3_256",
    "double_sha256",
    "get_hash_function",
    "hash_leaf",
    "to_hex",
    "from_hex",
]
